"""
Card model for the Ultimate Texas Hold'em advisor.

Ranks carry their poker value directly (2-14, Ace high) so that rank values
can index fixed-size count arrays. Cards are immutable values; a hand is
just a list or tuple of distinct cards.
"""

from __future__ import annotations
from typing import Iterable, List, Tuple
from enum import IntEnum


class InvalidHandError(ValueError):
    """Raised when cards passed to the advisor break the input contract."""


class Suit(IntEnum):
    """Card suits. Values are array indices only, suits have no order."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks valued 2 (lowest) to 14 (Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


# String mappings
SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

RANK_NAMES = {
    Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
    Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
    Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
    Rank.ACE: "Ace",
}

# Reverse mappings
CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_RANK["10"] = Rank.TEN  # Also accept "10"
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


class Card:
    """
    A playing card represented as (rank, suit).

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), Card.from_string("10♥")
    - Integer (0-51): Card.from_int(51) = Ace of Spades

    The integer encoding is: card_int = (rank - 2) * 4 + suit
    """

    __slots__ = ("_rank", "_suit")

    def __init__(self, rank: Rank, suit: Suit):
        try:
            rank = Rank(rank)
            suit = Suit(suit)
        except ValueError as e:
            raise InvalidHandError(f"Invalid card: {e}") from None
        object.__setattr__(self, "_rank", rank)
        object.__setattr__(self, "_suit", suit)

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "2c" (rank + suit char)
        - "A♠", "K♥", "T♦", "2♣" (rank + suit symbol)
        - "10s", "10♠" (two-character ten)
        """
        s = s.strip()
        if len(s) < 2:
            raise InvalidHandError(f"Invalid card string: {s!r}")

        if s.startswith("10"):
            rank_part, suit_part = "10", s[2:]
        else:
            rank_part, suit_part = s[0].upper(), s[1:]

        if rank_part not in CHAR_TO_RANK:
            raise InvalidHandError(f"Invalid rank: {rank_part}")

        rank = CHAR_TO_RANK[rank_part]

        # Try suit char first, then symbol
        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise InvalidHandError(f"Invalid suit: {suit_part!r}")

        return cls(rank, suit)

    @classmethod
    def from_int(cls, card_int: int) -> Card:
        """Create a card from integer (0-51)."""
        if not 0 <= card_int <= 51:
            raise InvalidHandError(f"Card int must be 0-51, got {card_int}")
        return cls(Rank(card_int // 4 + 2), Suit(card_int % 4))

    def to_int(self) -> int:
        """Return the integer representation (0-51)."""
        return (int(self._rank) - 2) * 4 + int(self._suit)

    def __int__(self) -> int:
        return self.to_int()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return False

    def __hash__(self) -> int:
        return self.to_int()

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self._rank < other._rank

    def __repr__(self) -> str:
        return f"Card({RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self._rank]}{SUIT_SYMBOLS[self._suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self._suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self._rank],
            "suit": SUIT_SYMBOLS[self._suit],
            "text": str(self),
            "code": self.short_str,
            "color": self.color,
        }


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh Td" (space-separated)
    - "AsKhTd" (no separator, 2 chars each)
    - "A♠ K♥ 10♦" (with symbols)

    Returns:
        List of Card objects
    """
    cards_str = cards_str.strip()
    if not cards_str:
        return []

    # Try space-separated first
    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    # Try 2-char chunks, 3 for a leading "10"
    result = []
    i = 0
    while i < len(cards_str):
        width = 3 if cards_str.startswith("10", i) else 2
        chunk = cards_str[i:i + width]
        if len(chunk) < width:
            raise InvalidHandError(f"Cannot parse card at position {i}: {cards_str[i:]}")
        result.append(Card.from_string(chunk))
        i += width

    return result


def validate_cards(
    cards: Iterable[Card],
    min_count: int,
    max_count: int,
    label: str = "hand",
) -> Tuple[Card, ...]:
    """
    Check that cards form a valid set of min_count..max_count distinct cards.

    Raises:
        InvalidHandError: On wrong cardinality, non-Card members or duplicates.
    """
    if isinstance(cards, (str, bytes)):
        raise InvalidHandError(f"{label} must be a sequence of Card, got a string")
    try:
        cards = tuple(cards)
    except TypeError:
        raise InvalidHandError(f"{label} must be a sequence of Card") from None

    if not min_count <= len(cards) <= max_count:
        if min_count == max_count:
            expected = str(min_count)
        else:
            expected = f"{min_count}-{max_count}"
        raise InvalidHandError(f"{label} needs {expected} cards, got {len(cards)}")

    for card in cards:
        if not isinstance(card, Card):
            raise InvalidHandError(f"{label} contains a non-card value: {card!r}")

    if len(set(cards)) != len(cards):
        seen = set()
        dupes = []
        for card in cards:
            if card in seen:
                dupes.append(card.short_str)
            seen.add(card)
        raise InvalidHandError(f"{label} contains duplicate cards: {', '.join(dupes)}")

    return cards
