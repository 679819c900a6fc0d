"""
UTH Advisor Core - Pure Python hand classification and decision rules

This module contains all advisor logic without any network dependencies.
"""

from uthadvisor.core.card import Card, Rank, Suit, InvalidHandError, parse_cards
from uthadvisor.core.hand import HandCategory, classify, describe_hand, has_hidden_pair
from uthadvisor.core.rules import Action, Street
from uthadvisor.core.strategy import (
    StrategyTable, StrategyError, get_strategy, load_strategy, strategy_from_dict,
)
from uthadvisor.core.advisor import (
    Recommendation, decide, decide_pre_flop, decide_post_flop, decide_final,
)
from uthadvisor.core.session import (
    SessionStats, StatsStore, HandSession, record_result, reset_stats,
)

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "InvalidHandError",
    "parse_cards",
    "HandCategory",
    "classify",
    "describe_hand",
    "has_hidden_pair",
    "Action",
    "Street",
    "StrategyTable",
    "StrategyError",
    "get_strategy",
    "load_strategy",
    "strategy_from_dict",
    "Recommendation",
    "decide",
    "decide_pre_flop",
    "decide_post_flop",
    "decide_final",
    "SessionStats",
    "StatsStore",
    "HandSession",
    "record_result",
    "reset_stats",
]
