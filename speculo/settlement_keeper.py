"""State keeper of the settlement module."""

from __future__ import annotations

import re
from collections.abc import Iterator

from speculo.addresses import Bech32Codec
from speculo.context import Context
from speculo.errors import (
    InvalidVoteError,
    MarketNotFoundError,
    MarketNotReadyError,
    OutcomeAlreadyFinalizedError,
)
from speculo.settlement_types import (
    GenesisState,
    MarketOutcome,
    Params,
    PredictionKeeper,
    ReputationKeeper,
    SettlementStats,
    VoteCommit,
    VoteReveal,
    default_genesis,
    default_params,
)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def market_voter_key(market_id: int, voter: str) -> str:
    """Return the storage key of a voter's record in a market."""
    return f"{market_id}/{voter}"


def _parse_int64(text: str) -> int | None:
    """Parse a base-10 signed 64-bit integer; None when it is not one."""
    if not _DECIMAL.fullmatch(text):
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


class SettlementKeeper:
    """Holds vote commits, reveals and final outcomes of prediction markets."""

    def __init__(
        self,
        address_codec: Bech32Codec,
        authority: bytes,
        prediction_keeper: PredictionKeeper,
        reputation_keeper: ReputationKeeper,
    ) -> None:
        try:
            address_codec.bytes_to_string(authority)
        except ValueError as exc:
            raise ValueError(f"invalid authority address {authority!r}: {exc}") from exc
        self.address_codec = address_codec
        self.authority = bytes(authority)
        self.prediction_keeper = prediction_keeper
        self.reputation_keeper = reputation_keeper
        self._params: Params | None = None
        self._commits: dict[str, VoteCommit] = {}
        self._reveals: dict[str, VoteReveal] = {}
        self._outcomes: dict[int, str] = {}

    # Parameters

    def get_params(self) -> Params:
        """Return the stored parameters, or the defaults if none are stored."""
        if self._params is None:
            return default_params()
        return self._params

    def set_params(self, params: Params) -> None:
        """Store the module parameters."""
        self._params = params

    # Commits, reveals and outcomes

    def set_commit(self, commit: VoteCommit) -> None:
        """Store a vote commit, replacing any earlier one by the same voter."""
        self._commits[market_voter_key(commit.market_id, commit.voter)] = commit

    def get_commit(self, market_id: int, voter: str) -> VoteCommit | None:
        """Return a voter's commit in a market, or None."""
        return self._commits.get(market_voter_key(market_id, voter))

    def set_reveal(self, reveal: VoteReveal) -> None:
        """Store a vote reveal, replacing any earlier one by the same voter."""
        self._reveals[market_voter_key(reveal.market_id, reveal.voter)] = reveal

    def get_reveal(self, market_id: int, voter: str) -> VoteReveal | None:
        """Return a voter's reveal in a market, or None."""
        return self._reveals.get(market_voter_key(market_id, voter))

    def set_outcome(self, market_id: int, outcome: str) -> None:
        """Store the final outcome of a market."""
        self._outcomes[market_id] = outcome

    def get_outcome(self, market_id: int) -> str | None:
        """Return the final outcome of a market, or None if not finalized."""
        return self._outcomes.get(market_id)

    @staticmethod
    def _in_market(store: dict, market_id: int) -> Iterator:
        prefix = f"{market_id}/"
        for key in sorted(store):
            if key.startswith(prefix):
                yield store[key]

    def get_all_reveals(self, market_id: int) -> list[VoteReveal]:
        """Return every reveal of a market, in key order."""
        return list(self._in_market(self._reveals, market_id))

    def get_all_commits(self, market_id: int) -> list[VoteCommit]:
        """Return every commit of a market, in key order."""
        return list(self._in_market(self._commits, market_id))

    # Tallies

    def get_reputation_weighted_votes(self, market_id: int, group_id: str) -> dict[str, int]:
        """Sum revealed votes per outcome, each weighted by the voter's reputation.

        Voters without a score, with an unreadable score or with a score below
        one count with weight one.
        """
        weights: dict[str, int] = {}
        for reveal in self.get_all_reveals(market_id):
            score_text, found = self.reputation_keeper.get_reputation_score(
                reveal.voter, group_id
            )
            weight = 1
            if found:
                score = _parse_int64(score_text)
                if score is not None:
                    weight = max(score, 1)
            weights[reveal.vote] = weights.get(reveal.vote, 0) + weight
        return weights

    def get_vote_distribution(self, market_id: int) -> dict[str, int]:
        """Count revealed votes per outcome."""
        counts: dict[str, int] = {}
        for reveal in self.get_all_reveals(market_id):
            counts[reveal.vote] = counts.get(reveal.vote, 0) + 1
        return counts

    def get_reputation_weighted_distribution(
        self, market_id: int, group_id: str
    ) -> dict[str, int]:
        """Return the reputation-weighted vote distribution of a market."""
        return self.get_reputation_weighted_votes(market_id, group_id)

    def is_market_ready_for_settlement(self, ctx: Context, market_id: int) -> bool:
        """Return True if the market can be settled; raise why it cannot."""
        market = self.prediction_keeper.get_prediction_market(market_id)
        if market is None:
            raise MarketNotFoundError()
        if self.get_outcome(market_id) is not None:
            raise OutcomeAlreadyFinalizedError()
        if market.deadline > 0 and ctx.block_time < market.deadline:
            raise MarketNotReadyError()
        return True

    def get_settlement_stats(self, market_id: int) -> SettlementStats:
        """Return commit and reveal counts of a market."""
        commits = self.get_all_commits(market_id)
        reveals = self.get_all_reveals(market_id)
        rate = len(reveals) / len(commits) if commits else 0.0
        return SettlementStats(
            market_id=market_id,
            total_commits=len(commits),
            total_reveals=len(reveals),
            reveal_rate=rate,
            unique_voters=len({c.voter for c in commits}),
        )

    def validate_vote(self, market_id: int, vote: str) -> None:
        """Raise unless the vote is one of the market's outcomes."""
        market = self.prediction_keeper.get_prediction_market(market_id)
        if market is None:
            raise MarketNotFoundError()
        if not market.outcomes:
            raise InvalidVoteError()
        self.prediction_keeper.validate_outcome(list(market.outcomes), vote)

    # Genesis

    def init_genesis(self, genesis: GenesisState) -> None:
        """Load commits, reveals and outcomes from a genesis state."""
        for commit in genesis.commits:
            self.set_commit(commit)
        for reveal in genesis.reveals:
            self.set_reveal(reveal)
        for outcome in genesis.outcomes:
            self.set_outcome(outcome.market_id, outcome.outcome)

    def export_genesis(self) -> GenesisState:
        """Return the module state as a genesis state."""
        genesis = default_genesis()
        genesis.commits.extend(self._commits[k] for k in sorted(self._commits))
        genesis.reveals.extend(self._reveals[k] for k in sorted(self._reveals))
        genesis.outcomes.extend(
            MarketOutcome(market_id=m, outcome=self._outcomes[m]) for m in sorted(self._outcomes)
        )
        return genesis