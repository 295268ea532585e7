"""State keeper of the reputation module."""

from __future__ import annotations

import re

from speculo.addresses import Bech32Codec
from speculo.reputation_types import GenesisState, Params, ReputationScore, default_genesis

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def _parse_int64(text: str) -> int:
    """Parse a base-10 signed 64-bit integer, strictly."""
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def _wrap_int64(value: int) -> int:
    """Reduce an integer to the signed 64-bit range with two's-complement wrap."""
    return (value - _INT64_MIN) % 2**64 + _INT64_MIN


class ReputationKeeper:
    """Holds the module parameters and per-group reputation scores."""

    def __init__(self, address_codec: Bech32Codec, authority: bytes) -> None:
        try:
            address_codec.bytes_to_string(authority)
        except ValueError as exc:
            raise ValueError(f"invalid authority address {authority!r}: {exc}") from exc
        self.address_codec = address_codec
        self.authority = bytes(authority)
        self._params: Params | None = None
        self._scores: dict[str, ReputationScore] = {}

    @staticmethod
    def _key(address: str, group_id: str) -> str:
        return f"{address}:{group_id}"

    def get_params(self) -> Params:
        """Return the stored parameters; raise KeyError if none were set."""
        if self._params is None:
            raise KeyError("params not set")
        return self._params

    def set_params(self, params: Params) -> None:
        """Store the module parameters."""
        self._params = params

    def get_reputation_score(self, address: str, group_id: str) -> tuple[str, bool]:
        """Return the user's score in a group and whether one is stored."""
        stored = self._scores.get(self._key(address, group_id))
        if stored is None:
            return "0", False
        return stored.score, True

    def set_reputation_score(self, address: str, group_id: str, score: str) -> None:
        """Store a user's score in a group."""
        self._scores[self._key(address, group_id)] = ReputationScore(
            address=address, score=score, group_id=group_id
        )

    def adjust_reputation_score(self, address: str, group_id: str, adjustment: int) -> None:
        """Add a signed amount to the user's score; the result never drops below zero."""
        current_text, found = self.get_reputation_score(address, group_id)
        current = 0
        if found:
            try:
                current = _parse_int64(current_text)
            except ValueError as exc:
                raise ValueError(f"failed to parse current score: {exc}") from exc
        new_score = max(_wrap_int64(current + adjustment), 0)
        self.set_reputation_score(address, group_id, str(new_score))

    def init_genesis(self, genesis: GenesisState) -> None:
        """Load the module state from a genesis state."""
        self.set_params(genesis.params)

    def export_genesis(self) -> GenesisState:
        """Return the module state as a genesis state."""
        genesis = default_genesis()
        genesis.params = self.get_params()
        return genesis