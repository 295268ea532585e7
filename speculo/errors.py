"""Error types raised by the reputation and settlement modules."""

from __future__ import annotations


class SpeculoError(Exception):
    """Base class for all module errors.

    Each subclass carries a codespace, a numeric code and a fixed description.
    An optional detail is put in front of the description, in the form
    ``"<detail>: <description>"``.
    """

    codespace = "speculo"
    code = 0
    description = "internal error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(self._render())

    def _render(self) -> str:
        if self.detail:
            return f"{self.detail}: {self.description}"
        return self.description

    def __str__(self) -> str:
        return self._render()


# Reputation module

class InvalidSignerError(SpeculoError):
    codespace = "reputation"
    code = 1100
    description = "expected gov account as only signer for proposal message"


# Settlement module

class _SettlementError(SpeculoError):
    codespace = "settlement"


class InvalidRequestError(_SettlementError):
    code = 1
    description = "invalid request"


class MarketNotFoundError(_SettlementError):
    code = 2
    description = "market not found"


class MarketNotReadyError(_SettlementError):
    code = 3
    description = "market not ready for settlement"


class InvalidVoteError(_SettlementError):
    code = 4
    description = "invalid vote for market outcomes"


class CommitmentMismatchError(_SettlementError):
    code = 5
    description = "commitment does not match reveal"


class AlreadyCommittedError(_SettlementError):
    code = 6
    description = "user already committed a vote"


class AlreadyRevealedError(_SettlementError):
    code = 7
    description = "user already revealed their vote"


class NoCommitmentFoundError(_SettlementError):
    code = 8
    description = "no commitment found for this user"


class OutcomeAlreadyFinalizedError(_SettlementError):
    code = 9
    description = "outcome already finalized"


class NoRevealsFoundError(_SettlementError):
    code = 10
    description = "no reveals found for this market"


class InvalidNonceError(_SettlementError):
    code = 11
    description = "invalid nonce"


class ReputationAdjustmentFailedError(_SettlementError):
    code = 12
    description = "reputation adjustment failed"


# Query status errors

class _StatusError(SpeculoError):
    codespace = "rpc"
    status = "Unknown"

    def _render(self) -> str:
        return f"rpc error: code = {self.status} desc = {self.detail or self.description}"


class InvalidArgumentError(_StatusError):
    code = 3
    status = "InvalidArgument"
    description = "invalid argument"


class NotFoundError(_StatusError):
    code = 5
    status = "NotFound"
    description = "not found"