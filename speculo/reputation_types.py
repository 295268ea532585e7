"""Data types of the reputation module."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

MODULE_NAME = "reputation"
STORE_KEY = MODULE_NAME
GOV_MODULE_NAME = "gov"
PARAMS_KEY = b"p_reputation"


@dataclass(frozen=True)
class Params:
    """Module parameters; the module currently has none."""

    def validate(self) -> None:
        """Check that every parameter is set, raising ValueError otherwise."""
        missing = [f.name for f in fields(self) if getattr(self, f.name) is None]
        if missing:
            raise ValueError(f"unset params fields: {', '.join(missing)}")


def default_params() -> Params:
    """Return the default parameters."""
    return Params()


def _params_from_dict(data: Any) -> Params:
    if data is None:
        return Params()
    if not isinstance(data, Mapping):
        raise ValueError("params must be an object")
    if data:
        raise ValueError(f"unknown params fields: {', '.join(sorted(data))}")
    return Params()


@dataclass
class GenesisState:
    """Initial state of the reputation module."""

    params: Params = field(default_factory=Params)

    def validate(self) -> None:
        """Validate the genesis state, raising on failure."""
        self.params.validate()

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready representation."""
        return {"params": {}}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenesisState:
        """Build a genesis state from its JSON representation."""
        if not isinstance(data, Mapping):
            raise ValueError("genesis state must be an object")
        unknown = set(data) - {"params"}
        if unknown:
            raise ValueError(f"unknown genesis fields: {', '.join(sorted(unknown))}")
        return cls(params=_params_from_dict(data.get("params")))


def default_genesis() -> GenesisState:
    """Return the default genesis state."""
    return GenesisState(params=default_params())


@dataclass(frozen=True)
class ReputationScore:
    """A user's score within one group, stored as a decimal string."""

    address: str
    score: str
    group_id: str


@dataclass(frozen=True)
class MsgAdjustScore:
    """Request to change a user's score by a signed amount."""

    authority: str
    address: str
    group_id: str
    adjustment: int


@dataclass(frozen=True)
class MsgUpdateParams:
    """Request to replace the module parameters."""

    authority: str
    params: Params = field(default_factory=Params)


@dataclass(frozen=True)
class QueryParamsRequest:
    """Query for the module parameters."""


@dataclass(frozen=True)
class QueryParamsResponse:
    """Answer to a parameters query."""

    params: Params = field(default_factory=Params)