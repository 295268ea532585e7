"""Application modules wiring keepers to genesis handling."""

from __future__ import annotations

import json
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Union

from speculo import reputation_types, settlement_types
from speculo.addresses import Bech32Codec, module_address, module_address_or_bech32
from speculo.reputation_keeper import ReputationKeeper
from speculo.settlement_keeper import SettlementKeeper
from speculo.settlement_types import PredictionKeeper
from speculo.settlement_types import ReputationKeeper as ReputationKeeperProtocol

RawJSON = Union[bytes, str]

CONSENSUS_VERSION = 1


@dataclass(frozen=True)
class ModuleConfig:
    """Module configuration; an empty authority means the governance module."""

    authority: str = ""


def _encode(data: dict[str, Any]) -> bytes:
    return json.dumps(data, sort_keys=True).encode()


def _decode(raw: RawJSON, module_name: str, genesis_type: Any) -> Any:
    try:
        return genesis_type.from_dict(json.loads(raw))
    except (ValueError, TypeError) as exc:
        raise ValueError(f"failed to unmarshal {module_name} genesis state: {exc}") from exc


def _resolve_authority(config: ModuleConfig, gov_module_name: str) -> bytes:
    if config.authority:
        return module_address_or_bech32(config.authority)
    return module_address(gov_module_name)


class ReputationModule:
    """The reputation module as seen by the application."""

    name = reputation_types.MODULE_NAME
    consensus_version = CONSENSUS_VERSION

    def __init__(self, keeper: ReputationKeeper) -> None:
        self.keeper = keeper

    def default_genesis(self) -> bytes:
        """Return the default genesis state as JSON bytes."""
        return _encode(reputation_types.default_genesis().to_dict())

    def validate_genesis(self, data: RawJSON) -> None:
        """Parse and validate a JSON genesis state, raising ValueError on failure."""
        _decode(data, self.name, reputation_types.GenesisState).validate()

    def init_genesis(self, data: RawJSON) -> None:
        """Load the module state from a JSON genesis state."""
        genesis = _decode(data, self.name, reputation_types.GenesisState)
        try:
            self.keeper.init_genesis(genesis)
        except Exception as exc:
            raise RuntimeError(f"failed to initialize {self.name} genesis state: {exc}") from exc

    def export_genesis(self) -> bytes:
        """Return the module state as JSON bytes."""
        try:
            genesis = self.keeper.export_genesis()
        except Exception as exc:
            raise RuntimeError(f"failed to export {self.name} genesis state: {exc}") from exc
        return _encode(genesis.to_dict())

    def generate_genesis_state(self, gen_state: MutableMapping[str, bytes]) -> None:
        """Put a simulation genesis state for this module into ``gen_state``."""
        genesis = reputation_types.GenesisState(params=reputation_types.default_params())
        gen_state[self.name] = _encode(genesis.to_dict())


class SettlementModule:
    """The settlement module as seen by the application."""

    name = settlement_types.MODULE_NAME
    consensus_version = CONSENSUS_VERSION

    def __init__(self, keeper: SettlementKeeper) -> None:
        self.keeper = keeper

    def default_genesis(self) -> bytes:
        """Return the default genesis state as JSON bytes."""
        return _encode(settlement_types.default_genesis().to_dict())

    def validate_genesis(self, data: RawJSON) -> None:
        """Parse and validate a JSON genesis state, raising ValueError on failure."""
        _decode(data, self.name, settlement_types.GenesisState).validate()

    def init_genesis(self, data: RawJSON) -> None:
        """Load commits, reveals and outcomes from a JSON genesis state."""
        genesis = _decode(data, self.name, settlement_types.GenesisState)
        try:
            self.keeper.init_genesis(genesis)
        except Exception as exc:
            raise RuntimeError(f"failed to initialize {self.name} genesis state: {exc}") from exc

    def export_genesis(self) -> bytes:
        """Return the module state as JSON bytes."""
        try:
            genesis = self.keeper.export_genesis()
        except Exception as exc:
            raise RuntimeError(f"failed to export {self.name} genesis state: {exc}") from exc
        return _encode(genesis.to_dict())

    def generate_genesis_state(self, gen_state: MutableMapping[str, bytes]) -> None:
        """Put a simulation genesis state for this module into ``gen_state``."""
        genesis = settlement_types.GenesisState(params=settlement_types.default_params())
        gen_state[self.name] = _encode(genesis.to_dict())


def provide_reputation_module(
    config: ModuleConfig, address_codec: Bech32Codec
) -> tuple[ReputationKeeper, ReputationModule]:
    """Build the reputation keeper and its module."""
    authority = _resolve_authority(config, reputation_types.GOV_MODULE_NAME)
    keeper = ReputationKeeper(address_codec, authority)
    return keeper, ReputationModule(keeper)


def provide_settlement_module(
    config: ModuleConfig,
    address_codec: Bech32Codec,
    prediction_keeper: PredictionKeeper,
    reputation_keeper: ReputationKeeperProtocol,
) -> tuple[SettlementKeeper, SettlementModule]:
    """Build the settlement keeper and its module."""
    authority = _resolve_authority(config, settlement_types.GOV_MODULE_NAME)
    keeper = SettlementKeeper(address_codec, authority, prediction_keeper, reputation_keeper)
    return keeper, SettlementModule(keeper)