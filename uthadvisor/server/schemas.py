"""
Pydantic schemas for API request/response validation.

Cards travel as short strings ("As", "Td", "10♥"); conversion to Card
objects happens in the routes so parse errors surface as HTTP 400.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field


# ============= Request Schemas =============

class ClassifyRequest(BaseModel):
    """Request to classify a set of cards."""
    cards: List[str] = Field(..., min_length=2, max_length=7, description="2-7 cards, e.g. ['As', 'Kh']")


class AdviseRequest(BaseModel):
    """Request advice for one street."""
    hole: List[str] = Field(..., min_length=2, max_length=2, description="The 2 hole cards")
    board: List[str] = Field(default_factory=list, max_length=5,
                             description="0, 3 or 5 board cards")
    strategy: Optional[str] = Field(default=None, description="Built-in strategy name")


class SelectCardRequest(BaseModel):
    """Request to pick the next card of the session hand."""
    card: str


class StatsResultRequest(BaseModel):
    """Request to record a finished hand."""
    won: bool


class SessionResetRequest(BaseModel):
    """Request to start a new hand, optionally switching strategy."""
    strategy: Optional[str] = None


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    code: str
    color: str


class ClassifyResponse(BaseModel):
    """Hand classification."""
    category: str
    name: str
    description: str
    value: int


class RecommendationSchema(BaseModel):
    """Advice for one street."""
    street: str
    action: str
    label: str
    reason: str
    hand_category: Optional[str] = None
    hand_name: Optional[str] = None


class SessionSchema(BaseModel):
    """Current hand selection state."""
    strategy: str
    stage: int
    hole: List[Optional[CardSchema]]
    board: List[Optional[CardSchema]]
    hand_name: Optional[str] = None
    description: Optional[str] = None
    recommendation: Optional[RecommendationSchema] = None


class StatsSchema(BaseModel):
    """Session win/loss statistics."""
    hands_played: int
    hands_won: int
    hands_lost: int
    current_streak: int
    win_rate: float


class StrategyListSchema(BaseModel):
    """Available strategy variants."""
    strategies: List[str]
    active: str


class StrategySchema(BaseModel):
    """A strategy table."""
    name: str
    pre_flop: Dict[str, Any]
    post_flop: Dict[str, Any]
    final: Dict[str, Any]
