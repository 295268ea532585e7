import pytest

from speculo.errors import (
    AlreadyCommittedError,
    AlreadyRevealedError,
    CommitmentMismatchError,
    InvalidArgumentError,
    InvalidNonceError,
    InvalidRequestError,
    InvalidSignerError,
    InvalidVoteError,
    MarketNotFoundError,
    MarketNotReadyError,
    NoCommitmentFoundError,
    NoRevealsFoundError,
    NotFoundError,
    OutcomeAlreadyFinalizedError,
    ReputationAdjustmentFailedError,
    SpeculoError,
)

DETAIL = "invalid authority address"

EXPECTED = [
    ("reputation", 1100, "expected gov account as only signer for proposal message"),
    ("settlement", 1, "invalid request"),
    ("settlement", 2, "market not found"),
    ("settlement", 3, "market not ready for settlement"),
    ("settlement", 4, "invalid vote for market outcomes"),
    ("settlement", 5, "commitment does not match reveal"),
    ("settlement", 6, "user already committed a vote"),
    ("settlement", 7, "user already revealed their vote"),
    ("settlement", 8, "no commitment found for this user"),
    ("settlement", 9, "outcome already finalized"),
    ("settlement", 10, "no reveals found for this market"),
    ("settlement", 11, "invalid nonce"),
    ("settlement", 12, "reputation adjustment failed"),
]


def test_registered_errors():
    errors = [
        InvalidSignerError(),
        InvalidRequestError(),
        MarketNotFoundError(),
        MarketNotReadyError(),
        InvalidVoteError(),
        CommitmentMismatchError(),
        AlreadyCommittedError(),
        AlreadyRevealedError(),
        NoCommitmentFoundError(),
        OutcomeAlreadyFinalizedError(),
        NoRevealsFoundError(),
        InvalidNonceError(),
        ReputationAdjustmentFailedError(),
    ]
    assert [(e.codespace, e.code, str(e)) for e in errors] == EXPECTED


def test_detail_is_prefixed():
    errors = [
        InvalidSignerError(DETAIL),
        InvalidRequestError(DETAIL),
        MarketNotFoundError(DETAIL),
        MarketNotReadyError(DETAIL),
        InvalidVoteError(DETAIL),
        CommitmentMismatchError(DETAIL),
        AlreadyCommittedError(DETAIL),
        AlreadyRevealedError(DETAIL),
        NoCommitmentFoundError(DETAIL),
        OutcomeAlreadyFinalizedError(DETAIL),
        NoRevealsFoundError(DETAIL),
        InvalidNonceError(DETAIL),
        ReputationAdjustmentFailedError(DETAIL),
    ]
    assert [str(e) for e in errors] == [f"{DETAIL}: {desc}" for _, _, desc in EXPECTED]
    assert [e.detail for e in errors] == [DETAIL] * len(EXPECTED)


def test_codes_unique_within_codespace():
    errors = [
        InvalidSignerError(),
        InvalidRequestError(),
        MarketNotFoundError(),
        MarketNotReadyError(),
        InvalidVoteError(),
        CommitmentMismatchError(),
        AlreadyCommittedError(),
        AlreadyRevealedError(),
        NoCommitmentFoundError(),
        OutcomeAlreadyFinalizedError(),
        NoRevealsFoundError(),
        InvalidNonceError(),
        ReputationAdjustmentFailedError(),
    ]
    pairs = [(e.codespace, e.code) for e in errors]
    assert len(pairs) == len(set(pairs)) == 13


def test_all_errors_catchable_by_base():
    err = AlreadyCommittedError("user already committed a vote")
    assert str(err) == "user already committed a vote: user already committed a vote"
    assert isinstance(err, SpeculoError)
    with pytest.raises(SpeculoError) as info:
        raise err
    assert info.value.code == 6


def test_invalid_argument_status():
    err = InvalidArgumentError("invalid request")
    assert err.status == "InvalidArgument"
    assert str(err).endswith("desc = invalid request")
    assert "InvalidArgument" in str(err)


def test_not_found_status():
    err = NotFoundError("outcome not found")
    assert err.status == "NotFound"
    assert str(err).endswith("desc = outcome not found")
    assert isinstance(err, SpeculoError)