"""
Tests for session statistics, the stats store and card-by-card selection.
"""

import json

import pytest
from uthadvisor.core.card import Card, InvalidHandError, parse_cards
from uthadvisor.core.rules import Action, Street
from uthadvisor.core.session import (
    HandSession, SessionStats, StatsStore, record_result, reset_stats,
)


class TestSessionStats:
    """Tests for the stats value object."""

    def test_initial(self):
        stats = SessionStats()
        assert stats.hands_played == 0
        assert stats.win_rate == 0.0

    def test_record_win_and_loss(self):
        stats = record_result(SessionStats(), won=True)
        stats = record_result(stats, won=True)
        assert stats.current_streak == 2

        stats = record_result(stats, won=False)
        assert stats.hands_played == 3
        assert stats.hands_won == 2
        assert stats.hands_lost == 1
        assert stats.current_streak == 0
        assert stats.win_rate == 66.7

    def test_record_does_not_mutate(self):
        stats = SessionStats()
        record_result(stats, won=True)
        assert stats.hands_played == 0

    def test_reset(self):
        assert reset_stats() == SessionStats()

    def test_persisted_keys(self):
        stats = SessionStats(hands_played=5, hands_won=3, current_streak=1)
        assert stats.to_dict() == {"handsPlayed": 5, "handsWon": 3, "currentStreak": 1}
        assert SessionStats.from_dict(stats.to_dict()) == stats

    @pytest.mark.parametrize("data", [
        {"handsPlayed": -1},
        {"handsPlayed": 1, "handsWon": 2},
        {"handsPlayed": 2, "handsWon": 1, "currentStreak": 2},
        {"handsPlayed": "many"},
    ])
    def test_invalid_persisted_stats(self, data):
        with pytest.raises(ValueError):
            SessionStats.from_dict(data)


class TestStatsStore:
    """Tests for stats persistence."""

    def test_missing_file_loads_fresh(self, stats_store):
        assert stats_store.load() == SessionStats()

    def test_save_and_load(self, stats_store):
        stats = SessionStats(hands_played=4, hands_won=1, current_streak=1)
        stats_store.save(stats)
        assert stats_store.load() == stats

    def test_stored_under_key(self, tmp_path):
        path = tmp_path / "stats.json"
        StatsStore(str(path)).save(SessionStats(hands_played=1, hands_won=1, current_streak=1))
        data = json.loads(path.read_text())
        assert data == {"holdemStats": {"handsPlayed": 1, "handsWon": 1, "currentStreak": 1}}

    def test_other_keys_preserved(self, tmp_path):
        path = tmp_path / "stats.json"
        path.write_text(json.dumps({"theme": "dark"}))
        StatsStore(str(path)).save(SessionStats())
        data = json.loads(path.read_text())
        assert data["theme"] == "dark"
        assert "holdemStats" in data

    def test_separate_keys(self, tmp_path):
        path = str(tmp_path / "stats.json")
        StatsStore(path, key="alice").save(SessionStats(hands_played=2))
        assert StatsStore(path, key="bob").load() == SessionStats()
        assert StatsStore(path, key="alice").load().hands_played == 2

    def test_corrupt_file_loads_fresh(self, tmp_path):
        path = tmp_path / "stats.json"
        path.write_text("{not json")
        assert StatsStore(str(path)).load() == SessionStats()

    def test_invalid_entry_loads_fresh(self, tmp_path):
        path = tmp_path / "stats.json"
        path.write_text(json.dumps({"holdemStats": {"handsPlayed": -3}}))
        assert StatsStore(str(path)).load() == SessionStats()

    def test_creates_directory(self, tmp_path):
        store = StatsStore(str(tmp_path / "nested" / "dir" / "stats.json"))
        store.save(SessionStats(hands_played=1))
        assert store.load().hands_played == 1


class TestHandSession:
    """Tests for card-by-card selection."""

    def select_all(self, session, hand):
        return [session.select(card) for card in parse_cards(hand)]

    def test_empty_slots(self, hand_session):
        assert hand_session.hole == [None, None]
        assert hand_session.board == [None] * 5
        assert hand_session.stage == 0
        assert hand_session.hand_name is None

    def test_streets_close_on_2nd_5th_and_7th_card(self, hand_session):
        results = self.select_all(hand_session, "As Kd 8h 3c Kh 2s 5h")
        streets = [r.street if r else None for r in results]
        assert streets == [
            None, Street.PRE_FLOP, None, None, Street.POST_FLOP, None, Street.FINAL,
        ]
        assert results[1].action == Action.RAISE_4X
        assert results[4].action == Action.RAISE_2X
        assert results[6].action == Action.RAISE_1X
        assert hand_session.stage == 3
        assert hand_session.is_complete

    def test_slots_fill_in_order(self, hand_session):
        self.select_all(hand_session, "As Kd 8h 3c")
        assert hand_session.hole == parse_cards("As Kd")
        assert hand_session.board[:2] == parse_cards("8h 3c")
        assert hand_session.board[2:] == [None, None, None]

    def test_advice_cleared_between_streets(self, hand_session):
        self.select_all(hand_session, "As Kd")
        assert hand_session.last_recommendation is not None
        hand_session.select(Card.from_string("8h"))
        assert hand_session.last_recommendation is None
        assert hand_session.stage == 1

    def test_live_hand_name(self, hand_session):
        hand_session.select(Card.from_string("As"))
        assert hand_session.hand_name is None
        hand_session.select(Card.from_string("Ah"))
        assert hand_session.hand_name == "Pair"

    def test_used_card_rejected(self, hand_session):
        hand_session.select(Card.from_string("As"))
        with pytest.raises(InvalidHandError, match="already selected"):
            hand_session.select(Card.from_string("As"))
        assert hand_session.num_selected == 1

    def test_eighth_card_rejected(self, hand_session):
        self.select_all(hand_session, "As Kd 8h 3c Kh 2s 5h")
        with pytest.raises(InvalidHandError, match="All 7 cards"):
            hand_session.select(Card.from_string("9c"))

    def test_non_card_rejected(self, hand_session):
        with pytest.raises(InvalidHandError):
            hand_session.select("As")

    def test_reset(self, hand_session):
        self.select_all(hand_session, "As Kd 8h")
        hand_session.reset()
        assert hand_session.selected_cards == []
        assert hand_session.used_cards == set()
        assert hand_session.stage == 0
        hand_session.select(Card.from_string("As"))

    def test_strategy_applies(self):
        session = HandSession(strategy="strict")
        results = self.select_all(session, "7s 7h")
        assert results[1].action == Action.RAISE_3X

    def test_to_dict(self, hand_session):
        self.select_all(hand_session, "As Ad")
        data = hand_session.to_dict()
        assert data["strategy"] == "standard"
        assert data["stage"] == 1
        assert data["hole"][0]["code"] == "As"
        assert data["board"] == [None] * 5
        assert data["hand_name"] == "Pair"
        assert data["description"] == "Pair of Aces"
        assert data["recommendation"]["action"] == "RAISE_4X"
