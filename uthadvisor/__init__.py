"""
UTH Advisor - Ultimate Texas Hold'em Strategy Advisor

A small Ultimate Texas Hold'em strategy project with:
- Pure Python hand classifier and per-street decision rules
- Strategy tables as data (built-in variants or JSON files)
- FastAPI server for a card-picker front end

Usage:
    from uthadvisor.core import Card, classify, decide_pre_flop
    from uthadvisor.core import HandSession, StatsStore
"""

__version__ = "0.1.0"

from uthadvisor.core.card import Card, Rank, Suit, InvalidHandError, parse_cards
from uthadvisor.core.hand import HandCategory, classify
from uthadvisor.core.advisor import (
    Recommendation, decide, decide_pre_flop, decide_post_flop, decide_final,
)

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "InvalidHandError",
    "parse_cards",
    "HandCategory",
    "classify",
    "Recommendation",
    "decide",
    "decide_pre_flop",
    "decide_post_flop",
    "decide_final",
    "__version__",
]
