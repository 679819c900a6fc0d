"""
Ultimate Texas Hold'em decision points and action vocabularies.

The player makes one decision per street:

1. Pre-flop (2 hole cards): check, or raise 4x / 3x the ante.
2. Post-flop (3 board cards revealed): check, or raise 2x.
3. Final (all 5 board cards revealed): fold, or raise 1x.

A raise ends the player's decisions for the hand, but the advisor still
answers every street independently so callers can ask "what if".
"""

from enum import Enum, auto
from typing import Dict, FrozenSet, Optional

from uthadvisor.core.card import InvalidHandError


class Street(Enum):
    """Decision points of a hand."""
    PRE_FLOP = auto()     # Hole cards only
    POST_FLOP = auto()    # After 3 community cards
    FINAL = auto()        # After all 5 community cards


class Action(Enum):
    """Recommended actions. Values are the display strings."""
    CHECK = "Check"
    RAISE_4X = "Raise 4X"
    RAISE_3X = "Raise 3X"
    RAISE_2X = "Raise 2X"
    RAISE_1X = "Raise 1X"
    FOLD = "Fold"

    @property
    def is_raise(self) -> bool:
        return self in (Action.RAISE_4X, Action.RAISE_3X, Action.RAISE_2X, Action.RAISE_1X)


# Allowed vocabulary per street
STREET_ACTIONS: Dict[Street, FrozenSet[Action]] = {
    Street.PRE_FLOP: frozenset({Action.RAISE_4X, Action.RAISE_3X, Action.CHECK}),
    Street.POST_FLOP: frozenset({Action.RAISE_2X, Action.CHECK}),
    Street.FINAL: frozenset({Action.RAISE_1X, Action.FOLD}),
}

# Cards per stage
HOLE_CARDS = 2
FLOP_CARDS = 3
BOARD_CARDS = 5
MAX_CARDS = HOLE_CARDS + BOARD_CARDS

# Board cards visible at each decision
STREET_BOARD_CARDS = {
    Street.PRE_FLOP: 0,
    Street.POST_FLOP: FLOP_CARDS,
    Street.FINAL: BOARD_CARDS,
}

# Default settings
DEFAULT_STRATEGY = "standard"
DEFAULT_STATS_KEY = "holdemStats"


def street_for_card_count(num_cards: int) -> Optional[Street]:
    """
    Get the street decided once num_cards have been selected.

    Returns None for counts that do not close a street (e.g. the turn card).
    """
    for street, board_cards in STREET_BOARD_CARDS.items():
        if num_cards == HOLE_CARDS + board_cards:
            return street
    return None


def street_for_board_size(board_size: int) -> Street:
    """Get the street for a given number of board cards (0, 3 or 5)."""
    for street, board_cards in STREET_BOARD_CARDS.items():
        if board_size == board_cards:
            return street
    raise InvalidHandError(f"Board must have 0, 3 or 5 cards, got {board_size}")
