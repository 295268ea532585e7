import pytest

from speculo.addresses import Bech32Codec, module_address
from speculo.reputation_keeper import ReputationKeeper
from speculo.reputation_types import GenesisState, default_params


@pytest.fixture
def keeper():
    k = ReputationKeeper(Bech32Codec("cosmos"), module_address("gov"))
    k.set_params(default_params())
    return k


def test_genesis_round_trip():
    k = ReputationKeeper(Bech32Codec("cosmos"), module_address("gov"))
    genesis = GenesisState(params=default_params())
    k.init_genesis(genesis)
    got = k.export_genesis()
    assert got.params == genesis.params


def test_export_without_params_raises():
    k = ReputationKeeper(Bech32Codec("cosmos"), module_address("gov"))
    with pytest.raises(KeyError):
        k.export_genesis()


def test_score_storage_and_retrieval(keeper):
    user = "cosmos1keeper000000000000000000000000000000000000"
    keeper.set_reputation_score(user, "test-group", "42")
    assert keeper.get_reputation_score(user, "test-group") == ("42", True)
    assert keeper.get_reputation_score("nonexistent", "test-group")[1] is False


def test_score_adjustment(keeper):
    user = "cosmos1adjust000000000000000000000000000000000000"
    keeper.adjust_reputation_score(user, "test-group", 10)
    assert keeper.get_reputation_score(user, "test-group") == ("10", True)
    keeper.adjust_reputation_score(user, "test-group", -3)
    assert keeper.get_reputation_score(user, "test-group") == ("7", True)
    keeper.adjust_reputation_score(user, "test-group", -10)
    assert keeper.get_reputation_score(user, "test-group") == ("0", True)


def test_authority_operations(keeper):
    assert keeper.authority == module_address("gov")
    text = keeper.address_codec.bytes_to_string(keeper.authority)
    assert text.startswith("cosmos1")


def test_multiple_score_operations(keeper):
    users = [
        "cosmos1multi100000000000000000000000000000000000",
        "cosmos1multi200000000000000000000000000000000000",
        "cosmos1multi300000000000000000000000000000000000",
    ]
    for i, user in enumerate(users):
        keeper.adjust_reputation_score(user, "multi-group", (i + 1) * 5)
    assert [keeper.get_reputation_score(u, "multi-group") for u in users] == [
        ("5", True),
        ("10", True),
        ("15", True),
    ]


def test_group_isolation(keeper):
    user = "cosmos1group000000000000000000000000000000000000"
    keeper.adjust_reputation_score(user, "group-1", 15)
    keeper.adjust_reputation_score(user, "group-2", 25)
    assert keeper.get_reputation_score(user, "group-1") == ("15", True)
    assert keeper.get_reputation_score(user, "group-2") == ("25", True)


def test_large_scores(keeper):
    user = "cosmos1large000000000000000000000000000000000000"
    keeper.adjust_reputation_score(user, "test-group", 1000000)
    assert keeper.get_reputation_score(user, "test-group") == ("1000000", True)
    keeper.adjust_reputation_score(user, "test-group", -999999)
    assert keeper.get_reputation_score(user, "test-group") == ("1", True)


def test_zero_adjustment(keeper):
    user = "cosmos1zero000000000000000000000000000000000000"
    keeper.adjust_reputation_score(user, "test-group", 10)
    keeper.adjust_reputation_score(user, "test-group", 0)
    assert keeper.get_reputation_score(user, "test-group") == ("10", True)


def test_empty_group(keeper):
    user = "cosmos1empty000000000000000000000000000000000000"
    keeper.adjust_reputation_score(user, "", 5)
    assert keeper.get_reputation_score(user, "") == ("5", True)


def test_minimum_score_enforcement(keeper):
    user = "cosmos1min000000000000000000000000000000000000"
    keeper.adjust_reputation_score(user, "test-group", 10)
    keeper.adjust_reputation_score(user, "test-group", -15)
    assert keeper.get_reputation_score(user, "test-group") == ("0", True)


@pytest.mark.parametrize("value", [0, 1, 10, 100, 1000, 10000, 100000])
def test_score_precision(keeper, value):
    user = "cosmos1prec000000000000000000000000000000000000"
    keeper.set_reputation_score(user, "test-group", str(value))
    assert keeper.get_reputation_score(user, "test-group") == (str(value), True)


def test_weighted_voting_simulation(keeper):
    users = [
        "cosmos1weight100000000000000000000000000000000000",
        "cosmos1weight200000000000000000000000000000000000",
        "cosmos1weight300000000000000000000000000000000000",
    ]
    for user, score in zip(users, [10, 20, 30]):
        keeper.adjust_reputation_score(user, "weight-group", score)
    total = sum(int(keeper.get_reputation_score(u, "weight-group")[0]) for u in users)
    assert total == 60


def test_consensus_alignment(keeper):
    user = "cosmos1consensus000000000000000000000000000000000000"
    keeper.adjust_reputation_score(user, "consensus-group", 50)
    keeper.adjust_reputation_score(user, "consensus-group", 1)
    assert keeper.get_reputation_score(user, "consensus-group") == ("51", True)
    keeper.adjust_reputation_score(user, "consensus-group", -1)
    assert keeper.get_reputation_score(user, "consensus-group") == ("50", True)


def test_penalty_for_wrong_votes(keeper):
    user = "cosmos1penalty000000000000000000000000000000000000"
    keeper.adjust_reputation_score(user, "penalty-group", 20)
    keeper.adjust_reputation_score(user, "penalty-group", -1)
    assert keeper.get_reputation_score(user, "penalty-group") == ("19", True)


def test_penalty_below_zero_protection(keeper):
    user = "cosmos1penaltyzero000000000000000000000000000000000000"
    keeper.adjust_reputation_score(user, "penalty-group", 1)
    keeper.adjust_reputation_score(user, "penalty-group", -5)
    assert keeper.get_reputation_score(user, "penalty-group") == ("0", True)


def test_retrieval_for_missing_user_and_group(keeper):
    assert keeper.get_reputation_score(
        "cosmos1nonexistent000000000000000000000000000000000000", "test-group"
    ) == ("0", False)
    assert keeper.get_reputation_score(
        "cosmos1user000000000000000000000000000000000000", "non-existent-group"
    ) == ("0", False)


def test_retrieval_after_reset(keeper):
    user = "cosmos1delete000000000000000000000000000000000000"
    keeper.adjust_reputation_score(user, "test-group", 10)
    assert keeper.get_reputation_score(user, "test-group") == ("10", True)
    keeper.set_reputation_score(user, "test-group", "0")
    assert keeper.get_reputation_score(user, "test-group") == ("0", True)


def test_score_update_persists(keeper):
    user = "cosmos1persist000000000000000000000000000000000000"
    keeper.set_reputation_score(user, "test-group", "42")
    assert keeper.get_reputation_score(user, "test-group") == ("42", True)
    keeper.set_reputation_score(user, "test-group", "100")
    assert keeper.get_reputation_score(user, "test-group") == ("100", True)


def test_adjust_unparsable_score_raises(keeper):
    keeper.set_reputation_score("user", "g", "abc")
    with pytest.raises(ValueError, match="failed to parse current score"):
        keeper.adjust_reputation_score("user", "g", 1)


def test_adjust_out_of_range_score_raises(keeper):
    keeper.set_reputation_score("user", "g", "9223372036854775808")
    with pytest.raises(ValueError, match="failed to parse current score"):
        keeper.adjust_reputation_score("user", "g", 1)


def test_adjust_overflow_wraps_and_clamps(keeper):
    keeper.set_reputation_score("user", "g", "9223372036854775807")
    keeper.adjust_reputation_score("user", "g", 1)
    assert keeper.get_reputation_score("user", "g") == ("0", True)