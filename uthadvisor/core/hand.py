"""
Hand classification for Ultimate Texas Hold'em.

This module names the best poker hand category reachable from 2-7 cards.
There is no kicker or inter-hand comparison here: the advisor only needs
to know which category a set of cards achieves.

Hand categories (best to worst):
10. Royal Flush: A♠ K♠ Q♠ J♠ T♠
9. Straight Flush: 5 consecutive cards of same suit
8. Four of a Kind: 4 cards of same rank
7. Full House: 3 of a kind + pair
6. Flush: 5 cards of same suit
5. Straight: 5 consecutive cards
4. Three of a Kind: 3 cards of same rank
3. Two Pair: 2 different pairs
2. Pair: 2 cards of same rank
1. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel).
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
from enum import IntEnum

from uthadvisor.core.card import Card, Rank, Suit, RANK_NAMES, validate_cards
from uthadvisor.core.rules import MAX_CARDS


class HandCategory(IntEnum):
    """Hand categories, ordered from worst (lowest value) to best."""
    HIGH_CARD = 1
    PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10


# Hand category names for display
HAND_CATEGORY_NAMES = {
    HandCategory.ROYAL_FLUSH: "Royal Flush",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.PAIR: "Pair",
    HandCategory.HIGH_CARD: "High Card",
}

MIN_HAND_CARDS = 2
STRAIGHT_LENGTH = 5
FLUSH_LENGTH = 5
FLUSH_DRAW_LENGTH = 4

# Ace value when it plays low in the wheel
LOW_ACE = 1


def rank_counts(cards: Sequence[Card]) -> List[int]:
    """Count cards per rank. Index is the rank value (2-14), 0 and 1 unused."""
    counts = [0] * (Rank.ACE + 1)
    for card in cards:
        counts[card.rank] += 1
    return counts


def suit_counts(cards: Sequence[Card]) -> List[int]:
    """Count cards per suit, indexed by Suit."""
    counts = [0] * len(Suit)
    for card in cards:
        counts[card.suit] += 1
    return counts


def _distinct_values(cards: Sequence[Card]) -> List[int]:
    """Distinct rank values ascending, plus 1 for an Ace playing low."""
    counts = rank_counts(cards)
    values = [value for value in range(Rank.TWO, Rank.ACE + 1) if counts[value]]
    if counts[Rank.ACE]:
        values.insert(0, LOW_ACE)
    return values


def _runs(values: List[int]) -> List[Tuple[int, int]]:
    """Split ascending distinct values into contiguous (low, high) runs."""
    runs = []
    start = prev = None
    for value in values:
        if prev is not None and value == prev + 1:
            prev = value
            continue
        if start is not None:
            runs.append((start, prev))
        start = prev = value
    if start is not None:
        runs.append((start, prev))
    return runs


def straight_high(cards: Sequence[Card]) -> Optional[int]:
    """
    Find the top card value of the best straight in cards.

    Duplicate ranks collapse before the check, so a pair never breaks or
    fakes a straight. The wheel (A-2-3-4-5) reports 5 as its top.

    Returns:
        The top value (5-14), or None if there is no straight.
    """
    best = None
    for low, high in _runs(_distinct_values(cards)):
        if high - low + 1 >= STRAIGHT_LENGTH:
            best = high if best is None else max(best, high)
    return best


def longest_run(cards: Sequence[Card]) -> Tuple[int, Optional[int], Optional[int]]:
    """
    Find the longest run of consecutive distinct ranks.

    Ace counts both high (14) and low (1). Ties go to the higher run.

    Returns:
        Tuple of (length, low_value, high_value); (0, None, None) for no cards.
    """
    best = (0, None, None)
    for low, high in _runs(_distinct_values(cards)):
        length = high - low + 1
        if length >= best[0]:
            best = (length, low, high)
    return best


def flush_suit(cards: Sequence[Card]) -> Optional[Suit]:
    """Get a suit with at least 5 cards, or None."""
    for suit, count in zip(Suit, suit_counts(cards)):
        if count >= FLUSH_LENGTH:
            return suit
    return None


def has_flush_draw(cards: Sequence[Card]) -> bool:
    """Check for 4 or more cards of one suit (a made flush counts too)."""
    return max(suit_counts(cards), default=0) >= FLUSH_DRAW_LENGTH


def has_pair(cards: Sequence[Card]) -> bool:
    """Check whether any rank appears at least twice."""
    return max(rank_counts(cards)) >= 2


def has_three_of_a_kind(cards: Sequence[Card]) -> bool:
    """Check whether any rank appears at least three times."""
    return max(rank_counts(cards)) >= 3


def is_monotone(cards: Sequence[Card]) -> bool:
    """Check whether every card shares one suit (e.g. a one-suit flop)."""
    return len(cards) > 1 and len({card.suit for card in cards}) == 1


def has_hidden_pair(
    hole: Sequence[Card],
    board: Sequence[Card],
    include_pocket_pair: bool = True,
) -> bool:
    """
    Check for a pair that uses at least one hole card.

    A pair made entirely of board cards does not count: every player
    shares it.

    Args:
        hole: The player's hole cards
        board: Community cards revealed so far
        include_pocket_pair: Count the two hole cards pairing each other

    Returns:
        True if a hole card takes part in a pair
    """
    if include_pocket_pair and len(hole) == 2 and hole[0].rank == hole[1].rank:
        return True
    board_ranks = {card.rank for card in board}
    return any(card.rank in board_ranks for card in hole)


def classify(cards: Sequence[Card]) -> HandCategory:
    """
    Classify the best hand category formed by 2-7 cards.

    Card order never affects the result. With fewer than 5 cards only
    pairs-based categories are reachable.

    Args:
        cards: 2-7 distinct Card objects

    Returns:
        The HandCategory achieved

    Raises:
        InvalidHandError: If not 2-7 distinct cards are provided
    """
    cards = validate_cards(cards, MIN_HAND_CARDS, MAX_CARDS)

    counts = rank_counts(cards)
    suited = flush_suit(cards)

    if suited is not None:
        top = straight_high([card for card in cards if card.suit == suited])
        if top == Rank.ACE:
            return HandCategory.ROYAL_FLUSH
        if top is not None:
            return HandCategory.STRAIGHT_FLUSH

    paired_ranks = sum(1 for count in counts if count >= 2)
    has_trips = max(counts) >= 3

    if max(counts) >= 4:
        return HandCategory.FOUR_OF_A_KIND
    if has_trips and paired_ranks >= 2:
        return HandCategory.FULL_HOUSE
    if suited is not None:
        return HandCategory.FLUSH
    if straight_high(cards) is not None:
        return HandCategory.STRAIGHT
    if has_trips:
        return HandCategory.THREE_OF_A_KIND
    if paired_ranks >= 2:
        return HandCategory.TWO_PAIR
    if paired_ranks == 1:
        return HandCategory.PAIR
    return HandCategory.HIGH_CARD


def hand_name(cards: Sequence[Card]) -> str:
    """Get the display name of the category cards achieve."""
    return HAND_CATEGORY_NAMES[classify(cards)]


def describe_hand(cards: Sequence[Card]) -> str:
    """Get a human-readable description of the hand."""
    cards = validate_cards(cards, MIN_HAND_CARDS, MAX_CARDS)
    category = classify(cards)
    counts = rank_counts(cards)

    def ranks_with(min_count: int) -> List[Rank]:
        return [Rank(v) for v in range(Rank.ACE, Rank.TWO - 1, -1) if counts[v] >= min_count]

    if category == HandCategory.ROYAL_FLUSH:
        return "Royal Flush"
    elif category == HandCategory.STRAIGHT_FLUSH:
        suited = flush_suit(cards)
        high = straight_high([c for c in cards if c.suit == suited])
        return f"Straight Flush, {_rank_name(high)} high"
    elif category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_rank_plural(ranks_with(4)[0])}"
    elif category == HandCategory.FULL_HOUSE:
        trips = ranks_with(3)[0]
        pair = next(r for r in ranks_with(2) if r != trips)
        return f"Full House, {_rank_plural(trips)} full of {_rank_plural(pair)}"
    elif category == HandCategory.FLUSH:
        suited = flush_suit(cards)
        high = max(c.rank for c in cards if c.suit == suited)
        return f"Flush, {_rank_name(high)} high"
    elif category == HandCategory.STRAIGHT:
        high = straight_high(cards)
        if high == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(high)} high"
    elif category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_rank_plural(ranks_with(3)[0])}"
    elif category == HandCategory.TWO_PAIR:
        pairs = ranks_with(2)
        return f"Two Pair, {_rank_plural(pairs[0])} and {_rank_plural(pairs[1])}"
    elif category == HandCategory.PAIR:
        return f"Pair of {_rank_plural(ranks_with(2)[0])}"
    else:
        high = max(c.rank for c in cards)
        return f"High Card, {_rank_name(high)}"


def _rank_name(value: int) -> str:
    """Get the name of a rank value."""
    return RANK_NAMES[Rank(value)]


def _rank_plural(value: int) -> str:
    """Get the plural name of a rank value ("Sixes", "Aces")."""
    name = _rank_name(value)
    return f"{name}es" if name.endswith("x") else f"{name}s"
