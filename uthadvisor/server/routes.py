"""
HTTP API Routes for the UTH advisor.

Stateless routes classify cards and give advice for a street. The session
routes drive a single card-picker hand and the win/loss tally for a
one-page front end.
"""

from typing import Dict, Any, List, Optional
from fastapi import APIRouter, HTTPException
import logging

from uthadvisor.config import Settings
from uthadvisor.core.card import Card, InvalidHandError
from uthadvisor.core.hand import HAND_CATEGORY_NAMES, classify, describe_hand
from uthadvisor.core.rules import Street, street_for_board_size
from uthadvisor.core.strategy import (
    StrategyError, StrategyTable, available_strategies, get_strategy, strategy_to_dict,
)
from uthadvisor.core.advisor import decide_pre_flop, decide_post_flop, decide_final
from uthadvisor.core.session import (
    HandSession, SessionStats, StatsStore, record_result, reset_stats,
)
from uthadvisor.server.schemas import (
    ClassifyRequest, AdviseRequest, SelectCardRequest, StatsResultRequest,
    SessionResetRequest, ClassifyResponse, RecommendationSchema, SessionSchema,
    StatsSchema, StrategyListSchema, StrategySchema,
)

router = APIRouter()

logger = logging.getLogger(__name__)

# Single-session state, set up by configure()
_strategy: Optional[StrategyTable] = None
_session: Optional[HandSession] = None
_store: Optional[StatsStore] = None
_stats: SessionStats = SessionStats()


def configure(settings: Settings) -> None:
    """Load the strategy and stats for the configured settings."""
    global _strategy, _session, _store, _stats
    _strategy = settings.load_strategy()
    _session = HandSession(_strategy)
    _store = StatsStore(settings.stats_file, settings.stats_key)
    _stats = _store.load()
    logger.info(f"Using strategy {_strategy.name!r}, stats in {_store.path}")


def save_stats() -> None:
    """Persist the current stats, if a store is configured."""
    if _store is not None:
        _store.save(_stats)


def get_session() -> HandSession:
    """Get the current hand session."""
    if _session is None:
        raise HTTPException(status_code=400, detail="Advisor not configured")
    return _session


def _parse(cards: List[str]) -> List[Card]:
    try:
        return [Card.from_string(s) for s in cards]
    except InvalidHandError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _stats_dict() -> Dict[str, Any]:
    return {
        "hands_played": _stats.hands_played,
        "hands_won": _stats.hands_won,
        "hands_lost": _stats.hands_lost,
        "current_streak": _stats.current_streak,
        "win_rate": _stats.win_rate,
    }


# ============= Classification & advice =============

@router.post("/classify", response_model=ClassifyResponse)
async def classify_cards(req: ClassifyRequest) -> Dict[str, Any]:
    """Classify 2-7 cards into a hand category."""
    cards = _parse(req.cards)
    try:
        category = classify(cards)
        description = describe_hand(cards)
    except InvalidHandError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "category": category.name,
        "name": HAND_CATEGORY_NAMES[category],
        "description": description,
        "value": int(category),
    }


@router.post("/advise", response_model=RecommendationSchema)
async def advise(req: AdviseRequest) -> Dict[str, Any]:
    """
    Recommend an action for one street.

    The street follows from the board size: 0 pre-flop, 3 post-flop, 5 final.
    """
    hole = _parse(req.hole)
    board = _parse(req.board)
    try:
        strategy = get_strategy(req.strategy) if req.strategy else _strategy
        street = street_for_board_size(len(board))
        if street == Street.PRE_FLOP:
            recommendation = decide_pre_flop(hole, strategy)
        elif street == Street.POST_FLOP:
            recommendation = decide_post_flop(hole, board, strategy)
        else:
            recommendation = decide_final(hole, board, strategy)
    except (InvalidHandError, StrategyError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return recommendation.to_dict()


@router.get("/strategies", response_model=StrategyListSchema)
async def list_strategies() -> Dict[str, Any]:
    """List the built-in strategy variants and the active one."""
    return {
        "strategies": available_strategies(),
        "active": _strategy.name if _strategy else get_strategy("standard").name,
    }


@router.get("/strategies/{name}", response_model=StrategySchema)
async def get_strategy_table(name: str) -> Dict[str, Any]:
    """Get a strategy table by name ("active" for the configured one)."""
    if name == "active" and _strategy is not None:
        return strategy_to_dict(_strategy)
    try:
        return strategy_to_dict(get_strategy(name))
    except StrategyError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ============= Session =============

@router.get("/session", response_model=SessionSchema)
async def get_session_state() -> Dict[str, Any]:
    """Get the cards picked so far and the latest advice."""
    return get_session().to_dict()


@router.post("/session/select", response_model=SessionSchema)
async def select_card(req: SelectCardRequest) -> Dict[str, Any]:
    """
    Pick the next card.

    Hole cards fill first, then the board. The 2nd, 5th and 7th card
    return advice for the street they close.
    """
    session = get_session()
    card = _parse([req.card])[0]
    try:
        session.select(card)
    except InvalidHandError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session.to_dict()


@router.post("/session/reset", response_model=SessionSchema)
async def reset_session(req: Optional[SessionResetRequest] = None) -> Dict[str, Any]:
    """Clear the hand. A strategy name switches variants for the next hand."""
    global _session, _strategy
    if req is not None and req.strategy:
        try:
            _strategy = get_strategy(req.strategy)
        except StrategyError as e:
            raise HTTPException(status_code=400, detail=str(e))
        _session = HandSession(_strategy)
    else:
        get_session().reset()
    return get_session().to_dict()


# ============= Statistics =============

@router.get("/stats", response_model=StatsSchema)
async def get_stats() -> Dict[str, Any]:
    """Get the session win/loss tally."""
    return _stats_dict()


# Plain functions: saving stats blocks on file I/O
@router.post("/stats/result", response_model=StatsSchema)
def add_result(req: StatsResultRequest) -> Dict[str, Any]:
    """Record a won or lost hand."""
    global _stats
    _stats = record_result(_stats, req.won)
    save_stats()
    return _stats_dict()


@router.post("/stats/reset", response_model=StatsSchema)
def clear_stats() -> Dict[str, Any]:
    """Reset the win/loss tally."""
    global _stats
    _stats = reset_stats()
    save_stats()
    return _stats_dict()
