"""
Pytest configuration and shared fixtures for UTH advisor tests.
"""

import pytest
from uthadvisor.core.card import Card, Rank, Suit, parse_cards
from uthadvisor.core.session import HandSession, StatsStore
from uthadvisor.core.strategy import get_strategy


@pytest.fixture
def cards():
    """Parse a space-separated card string, e.g. cards("As Kh")."""
    return parse_cards


@pytest.fixture
def standard():
    """The standard strategy table."""
    return get_strategy("standard")


@pytest.fixture
def strict():
    """The strict strategy table."""
    return get_strategy("strict")


@pytest.fixture
def hand_session():
    """A fresh hand session on the standard strategy."""
    return HandSession()


@pytest.fixture
def stats_store(tmp_path):
    """A stats store backed by a temporary file."""
    return StatsStore(str(tmp_path / "stats.json"))


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
