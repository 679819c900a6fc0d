"""
Session state for an advisor front end.

Holds what the card-picker front end needs between calls: the cards picked
so far (as explicit empty slots until filled), the recommendation for the
street just closed, and win/loss statistics. The advisor functions stay
pure; this module only sequences calls into them.

Statistics are immutable values. Updates return a new SessionStats, and
persistence is an explicit StatsStore.load() / save() at process
boundaries.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, replace
import json
import logging
import os

from uthadvisor.core.card import Card, InvalidHandError
from uthadvisor.core.hand import HAND_CATEGORY_NAMES, classify, describe_hand
from uthadvisor.core.rules import (
    Street, HOLE_CARDS, BOARD_CARDS, DEFAULT_STATS_KEY, street_for_card_count,
)
from uthadvisor.core.advisor import (
    Recommendation, StrategyLike, decide, resolve_strategy,
)


logger = logging.getLogger(__name__)


# ============= Statistics =============

@dataclass(frozen=True)
class SessionStats:
    """Win/loss tally for a playing session."""
    hands_played: int = 0
    hands_won: int = 0
    current_streak: int = 0

    @property
    def hands_lost(self) -> int:
        return self.hands_played - self.hands_won

    @property
    def win_rate(self) -> float:
        """Percentage of hands won, 0.0 before any hand is recorded."""
        if self.hands_played == 0:
            return 0.0
        return round(self.hands_won / self.hands_played * 100, 1)

    def to_dict(self) -> Dict[str, int]:
        return {
            "handsPlayed": self.hands_played,
            "handsWon": self.hands_won,
            "currentStreak": self.current_streak,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SessionStats:
        """
        Build stats from their persisted form.

        Raises:
            ValueError: If counts are missing, negative or inconsistent
        """
        try:
            stats = cls(
                hands_played=int(data.get("handsPlayed", 0)),
                hands_won=int(data.get("handsWon", 0)),
                current_streak=int(data.get("currentStreak", 0)),
            )
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Invalid stats: {data!r}") from e
        if min(stats.hands_played, stats.hands_won, stats.current_streak) < 0:
            raise ValueError(f"Stats cannot be negative: {data!r}")
        if stats.hands_won > stats.hands_played or stats.current_streak > stats.hands_won:
            raise ValueError(f"Inconsistent stats: {data!r}")
        return stats


def record_result(stats: SessionStats, won: bool) -> SessionStats:
    """Return stats with one more hand recorded. A loss ends the streak."""
    return replace(
        stats,
        hands_played=stats.hands_played + 1,
        hands_won=stats.hands_won + (1 if won else 0),
        current_streak=stats.current_streak + 1 if won else 0,
    )


def reset_stats() -> SessionStats:
    """Return empty stats."""
    return SessionStats()


class StatsStore:
    """
    JSON file holding session stats under a key.

    Other keys in the file are left untouched, so several front ends can
    share one file.

    Usage:
        store = StatsStore("~/.uthadvisor/stats.json")
        stats = store.load()
        store.save(record_result(stats, won=True))
    """

    def __init__(self, path: str, key: str = DEFAULT_STATS_KEY):
        self.path = os.path.expanduser(path)
        self.key = key

    def _read_all(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Cannot read stats file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring stats file {self.path}: top level is not an object")
            return {}
        return data

    def load(self) -> SessionStats:
        """Load stats, or fresh stats if the file or key is missing or corrupt."""
        entry = self._read_all().get(self.key)
        if entry is None:
            return SessionStats()
        try:
            stats = SessionStats.from_dict(entry)
        except ValueError as e:
            logger.warning(f"Ignoring stats under {self.key!r}: {e}")
            return SessionStats()
        logger.info(f"Loaded stats from {self.path}: {stats.hands_played} hands played")
        return stats

    def save(self, stats: SessionStats) -> None:
        """Write stats under the key, keeping the rest of the file."""
        data = self._read_all()
        data[self.key] = stats.to_dict()

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)
        logger.debug(f"Saved stats to {self.path}")


# ============= Card selection =============

class HandSession:
    """
    Card-by-card selection of one hand.

    Cards fill the two hole slots first, then the five board slots in
    reveal order. Selecting the 2nd, 5th and 7th card closes a street and
    returns its recommendation.

    Usage:
        session = HandSession(strategy="standard")
        session.select(Card.from_string("As"))      # None
        session.select(Card.from_string("Kd"))      # Recommendation (pre-flop)
    """

    def __init__(self, strategy: StrategyLike = None):
        self.strategy = resolve_strategy(strategy)
        self.reset()

    def reset(self) -> None:
        """Clear all slots for a new hand."""
        self.hole: List[Optional[Card]] = [None] * HOLE_CARDS
        self.board: List[Optional[Card]] = [None] * BOARD_CARDS
        self.used_cards: set = set()
        self.last_recommendation: Optional[Recommendation] = None
        self.stage = 0

    @property
    def selected_cards(self) -> List[Card]:
        """Cards picked so far, hole cards first."""
        return [card for card in self.hole + self.board if card is not None]

    @property
    def num_selected(self) -> int:
        return len(self.selected_cards)

    @property
    def is_complete(self) -> bool:
        return self.num_selected == HOLE_CARDS + BOARD_CARDS

    @property
    def hand_name(self) -> Optional[str]:
        """Live hand name once at least two cards are known."""
        cards = self.selected_cards
        if len(cards) < HOLE_CARDS:
            return None
        return HAND_CATEGORY_NAMES[classify(cards)]

    def select(self, card: Card) -> Optional[Recommendation]:
        """
        Place a card in the next empty slot.

        Returns:
            The recommendation if this card closes a street, else None

        Raises:
            InvalidHandError: If the card is already used or the hand is full
        """
        if not isinstance(card, Card):
            raise InvalidHandError(f"Expected a Card, got {card!r}")
        if card in self.used_cards:
            raise InvalidHandError(f"Card {card.short_str} is already selected")
        if self.is_complete:
            raise InvalidHandError("All 7 cards are already selected")

        index = self.num_selected
        if index < HOLE_CARDS:
            self.hole[index] = card
        else:
            self.board[index - HOLE_CARDS] = card
        self.used_cards.add(card)

        # Advice is only shown for the street just closed
        if street_for_card_count(index + 1) is None:
            self.last_recommendation = None
            return None

        recommendation = decide(self.selected_cards, self.strategy)
        self.last_recommendation = recommendation
        self.stage = list(Street).index(recommendation.street) + 1
        logger.info(
            f"{recommendation.street.name} with {' '.join(c.short_str for c in self.selected_cards)}: "
            f"{recommendation.label}"
        )
        return recommendation

    def to_dict(self) -> Dict[str, Any]:
        cards = self.selected_cards
        return {
            "strategy": self.strategy.name,
            "stage": self.stage,
            "hole": [card.to_dict() if card else None for card in self.hole],
            "board": [card.to_dict() if card else None for card in self.board],
            "hand_name": self.hand_name,
            "description": describe_hand(cards) if len(cards) >= HOLE_CARDS else None,
            "recommendation": (
                self.last_recommendation.to_dict() if self.last_recommendation else None
            ),
        }
