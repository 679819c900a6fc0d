"""
Tests for strategy tables and their dict/JSON form.
"""

import json

import pytest
from uthadvisor.core.card import Rank, parse_cards
from uthadvisor.core.rules import Action
from uthadvisor.core.strategy import (
    KickerThreshold, PreFlopTable, StrategyTable, StrategyError,
    STANDARD_STRATEGY, STRICT_STRATEGY, available_strategies, get_strategy,
    load_strategy, strategy_from_dict, strategy_to_dict,
)
from uthadvisor.core.advisor import decide_pre_flop, decide_post_flop


class TestBuiltinStrategies:
    """Tests for the built-in variants."""

    def test_available(self):
        assert available_strategies() == ["standard", "strict"]

    def test_lookup_is_case_insensitive(self):
        assert get_strategy("STRICT") is STRICT_STRATEGY
        assert get_strategy("standard") is STANDARD_STRATEGY

    def test_unknown_name(self):
        with pytest.raises(StrategyError, match="Unknown strategy"):
            get_strategy("aggressive")

    def test_variants_differ_where_expected(self):
        """The variants disagree on pair sizing and the jack offsuit kicker."""
        assert STANDARD_STRATEGY.pre_flop.pair_action == Action.RAISE_4X
        assert STRICT_STRATEGY.pre_flop.pair_action == Action.RAISE_3X
        assert STANDARD_STRATEGY.pre_flop.kicker_thresholds[Rank.JACK].offsuit == Rank.TEN
        assert STRICT_STRATEGY.pre_flop.kicker_thresholds[Rank.JACK].offsuit == Rank.JACK
        assert STRICT_STRATEGY.post_flop.small_pair_max_rank == Rank.FOUR
        assert STRICT_STRATEGY.post_flop.guard_suited_board
        assert not STANDARD_STRATEGY.post_flop.guard_suited_board

    def test_builtin_tables_are_read_only(self):
        """Shared variants cannot be changed in place by a caller."""
        with pytest.raises(TypeError):
            get_strategy("standard").pre_flop.kicker_thresholds[Rank.KING] = None
        with pytest.raises(AttributeError):
            get_strategy("standard").pre_flop.kicker_thresholds.clear()
        assert decide_pre_flop(parse_cards("Ks 2s")).action == Action.RAISE_4X

    def test_caller_dict_is_copied(self):
        thresholds = {Rank.KING: KickerThreshold(suited=Rank.TWO, offsuit=Rank.FIVE)}
        table = PreFlopTable(kicker_thresholds=thresholds)
        thresholds.clear()
        assert Rank.KING in table.kicker_thresholds

    def test_action_outside_street_vocabulary(self):
        """A table cannot recommend a post-flop 4x raise."""
        with pytest.raises(StrategyError, match="post_flop.raise_action"):
            StrategyTable(
                name="broken",
                post_flop=STANDARD_STRATEGY.post_flop.__class__(raise_action=Action.RAISE_4X),
            )


class TestKickerThreshold:
    """Tests for kicker thresholds."""

    def test_allows(self):
        limit = KickerThreshold(suited=Rank.SIX, offsuit=Rank.EIGHT)
        assert limit.allows(Rank.SIX, suited=True)
        assert not limit.allows(Rank.SIX, suited=False)
        assert limit.allows(Rank.EIGHT, suited=False)

    def test_disabled_side(self):
        limit = KickerThreshold(suited=Rank.TWO, offsuit=None)
        assert not limit.allows(Rank.KING, suited=False)


class TestStrategyFromDict:
    """Tests for user-supplied tables."""

    def test_overrides_only_given_fields(self):
        table = strategy_from_dict({"pre_flop": {"pair_action": "RAISE_3X"}})
        assert table.name == "custom"
        assert table.pre_flop.pair_action == Action.RAISE_3X
        assert table.pre_flop.ace_action == Action.RAISE_4X
        assert table.post_flop == STANDARD_STRATEGY.post_flop
        assert table.final == STANDARD_STRATEGY.final

    def test_display_value_action(self):
        table = strategy_from_dict({"name": "mine", "final": {"fold_action": "fold"}})
        assert table.name == "mine"
        assert table.final.fold_action == Action.FOLD

    def test_kicker_thresholds_replace_table(self):
        """Thresholds given in a dict replace the whole K/Q/J table."""
        table = strategy_from_dict({
            "pre_flop": {"kicker_thresholds": {"J": {"suited": 8, "offsuit": "J"}}},
        })
        assert table.pre_flop.kicker_thresholds == {
            Rank.JACK: KickerThreshold(suited=Rank.EIGHT, offsuit=Rank.JACK),
        }
        # Kings no longer have a threshold, so K9 offsuit checks
        assert decide_pre_flop(parse_cards("Kd 9s"), table).action == Action.CHECK

    def test_disable_post_flop_rule(self):
        table = strategy_from_dict({"post_flop": {"raise_on_flush_draw": False}})
        rec = decide_post_flop(parse_cards("4s 2s"), parse_cards("9s Ks 7d"), table)
        assert rec.action == Action.CHECK

    def test_null_threshold_disables_rule(self):
        table = strategy_from_dict({"post_flop": {"straight_draw_min_low": None}})
        assert table.post_flop.straight_draw_min_low is None

    @pytest.mark.parametrize("data, message", [
        ({"river": {}}, "Unknown strategy sections"),
        ({"pre_flop": {"pair_size": 3}}, "unknown setting"),
        ({"pre_flop": {"pair_action": "RAISE_9X"}}, "unknown action"),
        ({"pre_flop": {"pair_min_rank": 15}}, "invalid rank"),
        ({"pre_flop": {"pair_min_rank": None}}, "invalid rank"),
        ({"post_flop": {"guard_suited_board": "yes"}}, "expected true or false"),
        ({"post_flop": {"raise_action": "RAISE_1X"}}, "is not one of"),
        ({"post_flop": {"straight_draw_length": 9}}, "expected an integer"),
        ({"pre_flop": {"kicker_thresholds": {"K": 5}}}, "suited"),
        ({"final": []}, "expected an object"),
        ({"name": ""}, "non-empty"),
    ])
    def test_invalid(self, data, message):
        with pytest.raises(StrategyError, match=message):
            strategy_from_dict(data)

    def test_not_a_dict(self):
        with pytest.raises(StrategyError):
            strategy_from_dict(["standard"])

    def test_strategy_error_is_value_error(self):
        with pytest.raises(ValueError):
            strategy_from_dict({"bogus": 1})


class TestStrategyToDict:
    """Tests for exporting tables."""

    def test_json_compatible(self):
        data = strategy_to_dict(STRICT_STRATEGY)
        assert json.loads(json.dumps(data)) == data
        assert data["pre_flop"]["pair_action"] == "RAISE_3X"
        assert data["pre_flop"]["kicker_thresholds"]["J"] == {"suited": 8, "offsuit": 11}
        assert data["post_flop"]["small_pair_max_rank"] == 4
        assert data["pre_flop"]["premium_pair_min_rank"] == 11
        assert strategy_to_dict(STANDARD_STRATEGY)["pre_flop"]["premium_pair_min_rank"] is None

    def test_exported_table_loads_back(self):
        assert strategy_from_dict(strategy_to_dict(STRICT_STRATEGY)) == STRICT_STRATEGY


class TestLoadStrategy:
    """Tests for JSON strategy files."""

    def test_load(self, tmp_path):
        path = tmp_path / "strategy.json"
        path.write_text(json.dumps({"name": "file", "pre_flop": {"pair_min_rank": "2"}}))
        table = load_strategy(str(path))
        assert table.name == "file"
        assert table.pre_flop.pair_min_rank == Rank.TWO
        assert decide_pre_flop(parse_cards("2s 2h"), table).action == Action.RAISE_4X

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "strategy.json"
        path.write_text("{not json")
        with pytest.raises(StrategyError, match="Invalid strategy file"):
            load_strategy(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_strategy(str(tmp_path / "missing.json"))

    def test_pre_flop_table_defaults(self):
        assert PreFlopTable() == STANDARD_STRATEGY.pre_flop
