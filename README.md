# speculo

Reputation scores and vote settlement storage for prediction markets.

The package keeps a reputation score for each address in each group. It stores
commit-reveal votes on markets and tallies them, with each vote weighted by the
voter's reputation. It also loads and exports both kinds of state as JSON
genesis documents. All state is kept in memory.

## Installation

```
pip install speculo
```

To run the tests:

```
pip install "speculo[test]"
pytest
```

## Addresses

`speculo.addresses.Bech32Codec` converts raw address bytes to bech32 strings
and back for one prefix. The default prefix is `"cosmos"`. `string_to_bytes`
raises `ValueError` on a malformed address or on a wrong prefix.
`module_address(name)` returns the 20-byte account address of a named module.
`module_address_or_bech32(value)` decodes a bech32 address. If the value cannot
be decoded, it derives a module address from it instead.

## Reputation

`speculo.reputation_keeper.ReputationKeeper` stores one score for each pair of
address and group. A score is kept as a decimal string.

- `get_reputation_score(address, group_id)` returns `(score, found)`. The score
  is `"0"` when nothing is stored.
- `set_reputation_score(address, group_id, score)` stores a score.
- `adjust_reputation_score(address, group_id, adjustment)` adds a signed amount
  to the score. The result never drops below zero.

`speculo.reputation_server.ReputationMsgServer` makes sure a message comes from
the keeper's authority before it changes anything:

```python
from speculo.addresses import Bech32Codec, module_address
from speculo.reputation_keeper import ReputationKeeper
from speculo.reputation_server import ReputationMsgServer
from speculo.reputation_types import MsgAdjustScore

codec = Bech32Codec("cosmos")
authority = module_address("gov")
keeper = ReputationKeeper(codec, authority)
server = ReputationMsgServer(keeper)

server.adjust_score(MsgAdjustScore(
    authority=codec.bytes_to_string(authority),
    address="cosmos1voter",
    group_id="analysts",
    adjustment=10,
))
keeper.get_reputation_score("cosmos1voter", "analysts")  # ("10", True)
```

`adjust_score` raises `InvalidSignerError` when the authority cannot be decoded
or does not match. `update_params(MsgUpdateParams(...))` replaces the module
parameters under the same authority check.
`ReputationQueryServer(keeper).params(QueryParamsRequest())` returns a
`QueryParamsResponse`. If the request is `None`, it raises
`InvalidArgumentError`.

## Settlement

`speculo.settlement_keeper.SettlementKeeper` stores vote commits, vote reveals
and final outcomes for markets. Records are keyed by `market_voter_key(market_id,
voter)`, which gives `"<market_id>/<voter>"`. The keeper needs two other
objects. The first is a prediction keeper that can look up markets and check
outcomes. The second is a reputation keeper, and the `ReputationKeeper` above
will do. `speculo.settlement_types.PredictionKeeper` and
`speculo.settlement_types.ReputationKeeper` describe the two interfaces.

```python
import hashlib

from speculo.context import Context
from speculo.errors import InvalidVoteError
from speculo.settlement_keeper import SettlementKeeper
from speculo.settlement_types import PredictionMarket, VoteCommit, VoteReveal


class Markets:
    def __init__(self, markets):
        self.markets = markets

    def get_prediction_market(self, market_id):
        return self.markets.get(market_id)

    def validate_outcome(self, outcomes, vote):
        if vote not in outcomes:
            raise InvalidVoteError()


markets = Markets({1: PredictionMarket(deadline=100, outcomes=("YES", "NO"), group_id="analysts")})
settlement = SettlementKeeper(codec, authority, markets, keeper)

digest = hashlib.sha256(b"YES" + b"nonce12345678").hexdigest()
settlement.set_commit(VoteCommit(market_id=1, voter="cosmos1voter", commitment=digest))
settlement.set_commit(VoteCommit(market_id=1, voter="cosmos1other", commitment=digest))
settlement.set_reveal(VoteReveal(market_id=1, voter="cosmos1voter", vote="YES", nonce="nonce12345678"))

settlement.is_market_ready_for_settlement(Context(block_time=150), 1)  # True
settlement.get_vote_distribution(1)                       # {"YES": 1}
settlement.get_reputation_weighted_votes(1, "analysts")   # {"YES": 10}
settlement.get_settlement_stats(1).reveal_rate            # 0.5
```

Each reveal is weighted by the voter's score in the group. A voter with no
score, with a score that cannot be read, or with a score below one counts with
weight one. `is_market_ready_for_settlement` raises `MarketNotFoundError`,
`OutcomeAlreadyFinalizedError` or `MarketNotReadyError` to say why a market
cannot be settled. `validate_vote` raises `MarketNotFoundError` or
`InvalidVoteError`. It also passes on whatever the prediction keeper raises.

`speculo.context.Context` carries the block time and a logger. It also collects
the `Event`s recorded through `emit_event(kind, attributes)`.

## Errors

Every module error is a subclass of `speculo.errors.SpeculoError`. Each one
carries a `codespace`, a numeric `code` and a fixed `description`. Examples are
`MarketNotFoundError` (settlement, 2), `AlreadyCommittedError` (settlement, 6)
and `InvalidSignerError` (reputation, 1100).

## Genesis

`speculo.modules.ReputationModule` and `SettlementModule` handle genesis state
as JSON:

- `default_genesis()` returns the default state as JSON bytes.
- `validate_genesis(data)` parses the state and validates it. It raises
  `ValueError` on failure.
- `init_genesis(data)` loads the state into the keeper.
- `export_genesis()` returns the keeper's state as JSON bytes. In settlement
  state, market ids are written as strings.
- `generate_genesis_state(gen_state)` puts a default state under the module's
  name.

`provide_reputation_module(config, address_codec)` builds a keeper and its
module together, and so does `provide_settlement_module(config, address_codec,
prediction_keeper, reputation_keeper)`. When `ModuleConfig.authority` is empty,
the authority is the `gov` module address.

## What the package does not do

The package has no handlers for settlement messages. Nothing in it checks a
revealed vote and nonce against the stored commitment. Nothing refuses a second
commit or reveal, picks and records the winning outcome of a market, or adjusts
reputations after a market closes. `SettlementKeeper` only stores and tallies.
Code that uses it has to apply these rules itself. The `Msg*` and `Query*`
types in `speculo.settlement_types` are plain records, and no server in this
package handles them. State is not persisted anywhere. Export it with
`export_genesis` if it has to outlive the process. The package has no
command-line program.