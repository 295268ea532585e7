"""Data types of the settlement module."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

MODULE_NAME = "settlement"
STORE_KEY = MODULE_NAME
GOV_MODULE_NAME = "gov"
PARAMS_KEY = b"p_settlement"

_UINT64_MAX = 2**64 - 1


@dataclass(frozen=True)
class Params:
    """Module parameters; the module currently has none."""

    def validate(self) -> None:
        """Check the parameters, raising ValueError on any unexpected value."""
        unexpected = sorted(vars(self))
        if unexpected:
            raise ValueError(f"unknown params fields: {', '.join(unexpected)}")


def default_params() -> Params:
    """Return the default parameters."""
    return Params()


@dataclass(frozen=True)
class VoteCommit:
    """A voter's hidden vote: the hex SHA-256 of vote and nonce."""

    market_id: int
    voter: str
    commitment: str


@dataclass(frozen=True)
class VoteReveal:
    """A voter's disclosed vote and the nonce used in the commitment."""

    market_id: int
    voter: str
    vote: str
    nonce: str


@dataclass(frozen=True)
class MarketOutcome:
    """The finalized outcome of a market."""

    market_id: int
    outcome: str


def _uint64(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an unsigned integer")
    if isinstance(value, str):
        if not value.isdigit():
            raise ValueError(f"{name} must be an unsigned integer, got {value!r}")
        value = int(value)
    if not isinstance(value, int) or not 0 <= value <= _UINT64_MAX:
        raise ValueError(f"{name} must be an unsigned 64-bit integer, got {value!r}")
    return value


def _string(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value


def _record(data: Any, allowed: set[str], what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be an object")
    unknown = set(data) - allowed
    if unknown:
        raise ValueError(f"unknown {what} fields: {', '.join(sorted(unknown))}")
    return data


def _list(data: Any, name: str) -> list[Any]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"{name} must be a list")
    return data


def _params_from_dict(data: Any) -> Params:
    if data is None:
        return Params()
    _record(data, set(), "params")
    return Params()


def _commit_from_dict(data: Any) -> VoteCommit:
    rec = _record(data, {"market_id", "voter", "commitment"}, "commit")
    return VoteCommit(
        market_id=_uint64(rec.get("market_id", 0), "market_id"),
        voter=_string(rec.get("voter", ""), "voter"),
        commitment=_string(rec.get("commitment", ""), "commitment"),
    )


def _reveal_from_dict(data: Any) -> VoteReveal:
    rec = _record(data, {"market_id", "voter", "vote", "nonce"}, "reveal")
    return VoteReveal(
        market_id=_uint64(rec.get("market_id", 0), "market_id"),
        voter=_string(rec.get("voter", ""), "voter"),
        vote=_string(rec.get("vote", ""), "vote"),
        nonce=_string(rec.get("nonce", ""), "nonce"),
    )


def _outcome_from_dict(data: Any) -> MarketOutcome:
    rec = _record(data, {"market_id", "outcome"}, "outcome")
    return MarketOutcome(
        market_id=_uint64(rec.get("market_id", 0), "market_id"),
        outcome=_string(rec.get("outcome", ""), "outcome"),
    )


@dataclass
class GenesisState:
    """Initial state of the settlement module."""

    params: Params = field(default_factory=Params)
    commits: list[VoteCommit] = field(default_factory=list)
    reveals: list[VoteReveal] = field(default_factory=list)
    outcomes: list[MarketOutcome] = field(default_factory=list)

    def validate(self) -> None:
        """Validate the genesis state, raising on failure."""
        self.params.validate()

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready representation; 64-bit ids become strings."""
        return {
            "params": {},
            "commits": [
                {"market_id": str(c.market_id), "voter": c.voter, "commitment": c.commitment}
                for c in self.commits
            ],
            "reveals": [
                {"market_id": str(r.market_id), "voter": r.voter, "vote": r.vote, "nonce": r.nonce}
                for r in self.reveals
            ],
            "outcomes": [
                {"market_id": str(o.market_id), "outcome": o.outcome} for o in self.outcomes
            ],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenesisState:
        """Build a genesis state from its JSON representation."""
        rec = _record(data, {"params", "commits", "reveals", "outcomes"}, "genesis")
        return cls(
            params=_params_from_dict(rec.get("params")),
            commits=[_commit_from_dict(c) for c in _list(rec.get("commits"), "commits")],
            reveals=[_reveal_from_dict(r) for r in _list(rec.get("reveals"), "reveals")],
            outcomes=[_outcome_from_dict(o) for o in _list(rec.get("outcomes"), "outcomes")],
        )


def default_genesis() -> GenesisState:
    """Return the default genesis state."""
    return GenesisState(params=default_params(), commits=[], reveals=[], outcomes=[])


@dataclass(frozen=True)
class SettlementStats:
    """Counts describing how far settlement of a market has gone."""

    market_id: int
    total_commits: int
    total_reveals: int
    reveal_rate: float
    unique_voters: int


@dataclass(frozen=True)
class Commit:
    voter: str
    market_id: int
    commitment: str

    def key(self) -> bytes:
        return f"commit:{self.market_id}:{self.voter}".encode()


@dataclass(frozen=True)
class Reveal:
    voter: str
    market_id: int
    vote: str
    nonce: str

    def key(self) -> bytes:
        return f"reveal:{self.market_id}:{self.voter}".encode()


@dataclass(frozen=True)
class FinalOutcome:
    market_id: int
    outcome: str

    def key(self) -> bytes:
        return f"final:{self.market_id}".encode()


@dataclass(frozen=True)
class PredictionMarket:
    """The parts of a prediction market that settlement relies on."""

    deadline: int = 0
    outcomes: tuple[str, ...] = ()
    group_id: str = ""


@runtime_checkable
class PredictionKeeper(Protocol):
    """Access to prediction markets."""

    def get_prediction_market(self, market_id: int) -> PredictionMarket | None:
        """Return the market, or None when it does not exist."""
        ...

    def validate_outcome(self, outcomes: Sequence[str], vote: str) -> None:
        """Raise if the vote is not one of the outcomes."""
        ...


@runtime_checkable
class ReputationKeeper(Protocol):
    """Access to reputation scores."""

    def get_reputation_score(self, address: str, group_id: str) -> tuple[str, bool]:
        """Return the score and whether one is stored."""
        ...

    def adjust_reputation_score(self, address: str, group_id: str, adjustment: int) -> None:
        """Add a signed amount to the score."""
        ...


@dataclass(frozen=True)
class MsgCommitVote:
    creator: str
    market_id: int
    commitment: str


@dataclass(frozen=True)
class MsgRevealVote:
    creator: str
    market_id: int
    vote: str
    nonce: str


@dataclass(frozen=True)
class MsgFinalizeOutcome:
    creator: str
    market_id: int


@dataclass(frozen=True)
class MsgUpdateParams:
    authority: str
    params: Params = field(default_factory=Params)


@dataclass(frozen=True)
class QueryParamsRequest:
    pass


@dataclass(frozen=True)
class QueryParamsResponse:
    params: Params = field(default_factory=Params)


@dataclass(frozen=True)
class QueryCommitsRequest:
    market_id: int


@dataclass(frozen=True)
class QueryRevealsRequest:
    market_id: int


@dataclass(frozen=True)
class QueryOutcomeRequest:
    market_id: int