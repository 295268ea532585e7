"""Message and query handlers of the reputation module."""

from __future__ import annotations

from speculo.errors import InvalidArgumentError, InvalidSignerError
from speculo.reputation_keeper import ReputationKeeper
from speculo.reputation_types import (
    MsgAdjustScore,
    MsgUpdateParams,
    Params,
    QueryParamsRequest,
    QueryParamsResponse,
)


class ReputationMsgServer:
    """Handles state-changing messages of the reputation module."""

    def __init__(self, keeper: ReputationKeeper) -> None:
        self.keeper = keeper

    def adjust_score(self, msg: MsgAdjustScore) -> None:
        """Adjust a score; only the module authority may do so."""
        try:
            authority = self.keeper.address_codec.string_to_bytes(msg.authority)
        except ValueError as exc:
            raise InvalidSignerError("invalid authority address") from exc
        if authority != self.keeper.authority:
            raise InvalidSignerError("unauthorized: authority does not match")
        try:
            self.keeper.adjust_reputation_score(msg.address, msg.group_id, msg.adjustment)
        except ValueError as exc:
            raise InvalidSignerError(str(exc)) from exc

    def update_params(self, msg: MsgUpdateParams) -> None:
        """Replace the module parameters; only the module authority may do so."""
        codec = self.keeper.address_codec
        try:
            authority = codec.string_to_bytes(msg.authority)
        except ValueError as exc:
            raise ValueError(f"invalid authority address: {exc}") from exc
        if authority != self.keeper.authority:
            expected = codec.bytes_to_string(self.keeper.authority)
            raise InvalidSignerError(
                f"invalid authority; expected {expected}, got {msg.authority}"
            )
        msg.params.validate()
        self.keeper.set_params(msg.params)


class ReputationQueryServer:
    """Answers read-only queries of the reputation module."""

    def __init__(self, keeper: ReputationKeeper) -> None:
        self.keeper = keeper

    def params(self, request: QueryParamsRequest | None) -> QueryParamsResponse:
        """Return the current parameters, or empty ones if none are stored."""
        if request is None:
            raise InvalidArgumentError("invalid request")
        try:
            params = self.keeper.get_params()
        except KeyError:
            params = Params()
        return QueryParamsResponse(params=params)