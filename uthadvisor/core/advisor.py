"""
Decision engine for Ultimate Texas Hold'em.

One pure function per street maps the player's cards to a recommended
action. Rules are evaluated in priority order and the first match wins;
thresholds and resulting actions come from a StrategyTable.

Usage:
    hole = parse_cards("As Kd")
    decide_pre_flop(hole).action            # Action.RAISE_4X
    decide_post_flop(hole, parse_cards("Ah 7c 2d")).label
    decide(parse_cards("As Kd Ah 7c 2d 9s 3h"), strategy="strict")
"""

from __future__ import annotations
from typing import Optional, Sequence, Tuple, Union
from dataclasses import dataclass
import logging

from uthadvisor.core.card import Card, Rank, InvalidHandError, validate_cards
from uthadvisor.core.hand import (
    HandCategory, HAND_CATEGORY_NAMES, classify, rank_counts, straight_high,
    flush_suit, has_flush_draw, has_hidden_pair, has_pair, has_three_of_a_kind,
    is_monotone, longest_run,
)
from uthadvisor.core.rules import (
    Action, Street, HOLE_CARDS, FLOP_CARDS, BOARD_CARDS, MAX_CARDS,
    street_for_card_count,
)
from uthadvisor.core.strategy import StrategyTable, STANDARD_STRATEGY, get_strategy


logger = logging.getLogger(__name__)

StrategyLike = Union[StrategyTable, str, None]


@dataclass(frozen=True)
class Recommendation:
    """
    Advice for one street.

    Attributes:
        street: The decision point this advice is for
        action: Recommended action
        reason: Identifier of the rule that produced the action
        hand_category: Category of all known cards (always set on the final street)
    """
    street: Street
    action: Action
    reason: str
    hand_category: Optional[HandCategory] = None

    @property
    def hand_name(self) -> Optional[str]:
        if self.hand_category is None:
            return None
        return HAND_CATEGORY_NAMES[self.hand_category]

    @property
    def label(self) -> str:
        """Display string, e.g. "Raise 2X" or "Raise 1X (Two Pair)"."""
        if self.street == Street.FINAL and self.action.is_raise and self.hand_category:
            return f"{self.action.value} ({self.hand_name})"
        return self.action.value

    def to_dict(self) -> dict:
        return {
            "street": self.street.name,
            "action": self.action.name,
            "label": self.label,
            "reason": self.reason,
            "hand_category": self.hand_category.name if self.hand_category else None,
            "hand_name": self.hand_name,
        }


def resolve_strategy(strategy: StrategyLike) -> StrategyTable:
    """Accept a table, a built-in variant name, or None for the default."""
    if strategy is None:
        return STANDARD_STRATEGY
    if isinstance(strategy, StrategyTable):
        return strategy
    return get_strategy(strategy)


def _validate_street(
    hole: Sequence[Card],
    board: Sequence[Card],
    board_size: int,
) -> Tuple[Tuple[Card, ...], Tuple[Card, ...]]:
    hole = validate_cards(hole, HOLE_CARDS, HOLE_CARDS, label="hole")
    board = validate_cards(board, board_size, board_size, label="board")
    shared = set(hole) & set(board)
    if shared:
        names = ", ".join(sorted(card.short_str for card in shared))
        raise InvalidHandError(f"Cards appear in both hole and board: {names}")
    return hole, board


def _recommend(street: Street, action: Action, reason: str,
               category: Optional[HandCategory] = None) -> Recommendation:
    logger.debug(f"{street.name}: {reason} -> {action.value}")
    return Recommendation(street=street, action=action, reason=reason, hand_category=category)


# ============= Pre-flop =============

def decide_pre_flop(hole: Sequence[Card], strategy: StrategyLike = None) -> Recommendation:
    """
    Recommend the pre-flop action from the two hole cards.

    Priority: pocket pair, any Ace, K/Q/J high with a qualifying kicker
    (thresholds differ for suited and offsuit), otherwise check.

    Raises:
        InvalidHandError: If hole is not exactly 2 distinct cards
    """
    table = resolve_strategy(strategy).pre_flop
    hole = validate_cards(hole, HOLE_CARDS, HOLE_CARDS, label="hole")

    high, low = sorted((card.rank for card in hole), reverse=True)
    suited = hole[0].suit == hole[1].suit

    if high == low:
        if table.premium_pair_min_rank is not None and high >= table.premium_pair_min_rank:
            return _recommend(Street.PRE_FLOP, table.premium_pair_action, "premium_pocket_pair")
        if high >= table.pair_min_rank:
            return _recommend(Street.PRE_FLOP, table.pair_action, "pocket_pair")
        return _recommend(Street.PRE_FLOP, table.default_action, "small_pocket_pair")

    if high == Rank.ACE:
        return _recommend(Street.PRE_FLOP, table.ace_action, "ace_high")

    threshold = table.kicker_thresholds.get(high)
    if threshold is not None and threshold.allows(low, suited):
        reason = "suited_high_card" if suited else "offsuit_high_card"
        return _recommend(Street.PRE_FLOP, table.high_card_action, reason)

    return _recommend(Street.PRE_FLOP, table.default_action, "default")


# ============= Post-flop =============

def _pocket_pair_outranked(hole: Sequence[Card], board: Sequence[Card], max_rank: int) -> bool:
    """A small pocket pair facing a higher pair on the board."""
    if hole[0].rank != hole[1].rank or hole[0].rank > max_rank:
        return False
    counts = rank_counts(board)
    return any(counts[value] >= 2 for value in range(hole[0].rank + 1, Rank.ACE + 1))


def _suited_board_blocks(hole: Sequence[Card], board: Sequence[Card]) -> bool:
    """A one-suit flop without a flush draw or a kicker over the board."""
    if not is_monotone(board):
        return False
    if has_flush_draw(list(hole) + list(board)):
        return False
    return max(card.rank for card in hole) < max(card.rank for card in board)


def decide_post_flop(
    hole: Sequence[Card],
    board: Sequence[Card],
    strategy: StrategyLike = None,
) -> Recommendation:
    """
    Recommend the post-flop action from the hole cards and a 3-card flop.

    Priority:
    1. Three of a kind across all five cards
    2. A pair using a hole card, unless suppressed by the table's
       small-pair or suited-board guards
    3. Ace (configurable) kicker on a paired board
    4. Open straight draw high enough, not into a one-suit flop
    5. Flush draw
    6. Check

    Raises:
        InvalidHandError: On wrong card counts or duplicate cards
    """
    table = resolve_strategy(strategy).post_flop
    hole, board = _validate_street(hole, board, FLOP_CARDS)
    cards = hole + board
    street = Street.POST_FLOP

    if table.raise_on_trips and has_three_of_a_kind(cards):
        return _recommend(street, table.raise_action, "three_of_a_kind")

    if table.raise_on_hidden_pair and has_hidden_pair(hole, board):
        if (table.small_pair_max_rank is not None
                and _pocket_pair_outranked(hole, board, table.small_pair_max_rank)):
            logger.debug("POST_FLOP: small pocket pair under a board pair, not raising")
        elif table.guard_suited_board and _suited_board_blocks(hole, board):
            logger.debug("POST_FLOP: pair on a suited board without cover, not raising")
        else:
            return _recommend(street, table.raise_action, "hidden_pair")

    if (table.paired_board_kicker_min is not None and has_pair(board)
            and max(card.rank for card in hole) >= table.paired_board_kicker_min):
        return _recommend(street, table.raise_action, "paired_board_kicker")

    if table.straight_draw_min_low is not None:
        length, _, high = longest_run(cards)
        # Lowest card of the highest draw-length window in the run
        window_low = high - table.straight_draw_length + 1
        if (length >= table.straight_draw_length and window_low >= table.straight_draw_min_low
                and (not is_monotone(board) or has_flush_draw(cards))):
            return _recommend(street, table.raise_action, "straight_draw")

    if table.raise_on_flush_draw and has_flush_draw(cards):
        return _recommend(street, table.raise_action, "flush_draw")

    return _recommend(street, table.check_action, "default")


# ============= Final =============

def decide_final(
    hole: Sequence[Card],
    board: Sequence[Card],
    strategy: StrategyLike = None,
) -> Recommendation:
    """
    Recommend the final action once all five board cards are known.

    Priority:
    1. The board alone makes a straight or flush (everyone plays it)
    2. A pair using a hole card
    3. A paired board with a high (K/A by default) hole card
    4. Fold

    The returned recommendation always carries the category of the full
    seven-card hand so callers can show it next to the action.

    Raises:
        InvalidHandError: On wrong card counts or duplicate cards
    """
    table = resolve_strategy(strategy).final
    hole, board = _validate_street(hole, board, BOARD_CARDS)
    category = classify(hole + board)
    street = Street.FINAL

    if table.raise_on_board_made_hand and (
            straight_high(board) is not None or flush_suit(board) is not None):
        return _recommend(street, table.raise_action, "board_made_hand", category)

    if table.raise_on_hidden_pair and has_hidden_pair(
            hole, board, include_pocket_pair=table.pocket_pair_counts):
        return _recommend(street, table.raise_action, "hidden_pair", category)

    if (table.board_pair_kicker_min is not None and has_pair(board)
            and max(card.rank for card in hole) >= table.board_pair_kicker_min):
        return _recommend(street, table.raise_action, "paired_board_kicker", category)

    return _recommend(street, table.fold_action, "default", category)


def decide(cards: Sequence[Card], strategy: StrategyLike = None) -> Recommendation:
    """
    Recommend an action for 2, 5 or 7 cards in selection order.

    The first two cards are the hole cards, the rest the board.

    Raises:
        InvalidHandError: If the count is not 2, 5 or 7, or cards repeat
    """
    cards = validate_cards(cards, HOLE_CARDS, MAX_CARDS)
    street = street_for_card_count(len(cards))
    hole, board = cards[:HOLE_CARDS], cards[HOLE_CARDS:]

    if street == Street.PRE_FLOP:
        return decide_pre_flop(hole, strategy)
    if street == Street.POST_FLOP:
        return decide_post_flop(hole, board, strategy)
    if street == Street.FINAL:
        return decide_final(hole, board, strategy)
    raise InvalidHandError(f"No decision is made with {len(cards)} cards; expected 2, 5 or 7")
