"""
Strategy tables for the Ultimate Texas Hold'em advisor.

A strategy is plain data: per-street thresholds and the action each rule
yields. The decision engine walks the rules in a fixed priority order and
reads everything else from the table, so a variant is selected (or a new
one supplied) without touching code.

Two built-in variants:
- "standard": raise 4x with any pair of threes or better, the common
  basic-strategy thresholds for K/Q/J, and the full post-flop rule list.
- "strict": pairs below jacks raise 3x (jacks and up still 4x), jacks
  need a jack-or-better kicker offsuit, and post-flop pair raises are suppressed on threatening boards.

Usage:
    table = get_strategy("strict")
    table = load_strategy("my_strategy.json")
    table = strategy_from_dict({"pre_flop": {"pair_action": "RAISE_3X"}})
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
import json
import logging

from uthadvisor.core.card import Rank, CHAR_TO_RANK, RANK_CHARS
from uthadvisor.core.rules import Action, Street, STREET_ACTIONS


logger = logging.getLogger(__name__)


class StrategyError(ValueError):
    """Raised when a strategy table is malformed."""


@dataclass(frozen=True)
class KickerThreshold:
    """Minimum kicker rank to raise with a given high card.

    None disables raising on that side (suited or offsuit).
    """
    suited: Optional[int] = None
    offsuit: Optional[int] = None

    def allows(self, kicker: int, suited: bool) -> bool:
        minimum = self.suited if suited else self.offsuit
        return minimum is not None and kicker >= minimum


@dataclass(frozen=True)
class PreFlopTable:
    """Pre-flop rules: pocket pair, then Ace, then K/Q/J kicker thresholds.

    Pocket pairs at or above premium_pair_min_rank use premium_pair_action
    instead of pair_action. None sends every pair to pair_action.
    """
    pair_min_rank: int = Rank.THREE
    pair_action: Action = Action.RAISE_4X
    premium_pair_min_rank: Optional[int] = None
    premium_pair_action: Action = Action.RAISE_4X
    ace_action: Action = Action.RAISE_4X
    kicker_thresholds: Mapping[int, KickerThreshold] = field(default_factory=lambda: {
        Rank.KING: KickerThreshold(suited=Rank.TWO, offsuit=Rank.FIVE),
        Rank.QUEEN: KickerThreshold(suited=Rank.SIX, offsuit=Rank.EIGHT),
        Rank.JACK: KickerThreshold(suited=Rank.EIGHT, offsuit=Rank.TEN),
    })
    high_card_action: Action = Action.RAISE_4X
    default_action: Action = Action.CHECK

    def __post_init__(self):
        # Read-only copy so shared tables cannot be changed in place
        object.__setattr__(
            self, "kicker_thresholds", MappingProxyType(dict(self.kicker_thresholds))
        )


@dataclass(frozen=True)
class PostFlopTable:
    """Post-flop rules. None on a threshold disables that rule."""
    raise_action: Action = Action.RAISE_2X
    check_action: Action = Action.CHECK
    raise_on_trips: bool = True
    raise_on_hidden_pair: bool = True
    # Pocket pairs at or below this rank do not raise into a higher board pair
    small_pair_max_rank: Optional[int] = None
    # On a one-suit flop a pair needs a flush draw or a kicker >= the board's top card
    guard_suited_board: bool = False
    paired_board_kicker_min: Optional[int] = Rank.ACE
    straight_draw_min_low: Optional[int] = Rank.EIGHT
    straight_draw_length: int = 4
    raise_on_flush_draw: bool = True


@dataclass(frozen=True)
class FinalTable:
    """Final-street rules."""
    raise_action: Action = Action.RAISE_1X
    fold_action: Action = Action.FOLD
    raise_on_board_made_hand: bool = True
    raise_on_hidden_pair: bool = True
    pocket_pair_counts: bool = False
    board_pair_kicker_min: Optional[int] = Rank.KING


@dataclass(frozen=True)
class StrategyTable:
    """A complete strategy: one rule table per street."""
    name: str
    pre_flop: PreFlopTable = field(default_factory=PreFlopTable)
    post_flop: PostFlopTable = field(default_factory=PostFlopTable)
    final: FinalTable = field(default_factory=FinalTable)

    def __post_init__(self):
        _check_actions(Street.PRE_FLOP, self.pre_flop,
                       ("pair_action", "premium_pair_action", "ace_action",
                        "high_card_action", "default_action"))
        _check_actions(Street.POST_FLOP, self.post_flop, ("raise_action", "check_action"))
        _check_actions(Street.FINAL, self.final, ("raise_action", "fold_action"))


def _check_actions(street: Street, table: Any, names: tuple) -> None:
    allowed = STREET_ACTIONS[street]
    for name in names:
        action = getattr(table, name)
        if not isinstance(action, Action) or action not in allowed:
            raise StrategyError(
                f"{street.name.lower()}.{name}: {action!r} is not one of "
                f"{sorted(a.name for a in allowed)}"
            )


STANDARD_STRATEGY = StrategyTable(name="standard")

STRICT_STRATEGY = StrategyTable(
    name="strict",
    pre_flop=PreFlopTable(
        pair_action=Action.RAISE_3X,
        premium_pair_min_rank=Rank.JACK,
        premium_pair_action=Action.RAISE_4X,
        kicker_thresholds={
            Rank.KING: KickerThreshold(suited=Rank.TWO, offsuit=Rank.FIVE),
            Rank.QUEEN: KickerThreshold(suited=Rank.SIX, offsuit=Rank.EIGHT),
            Rank.JACK: KickerThreshold(suited=Rank.EIGHT, offsuit=Rank.JACK),
        },
    ),
    post_flop=PostFlopTable(
        small_pair_max_rank=Rank.FOUR,
        guard_suited_board=True,
    ),
    final=FinalTable(pocket_pair_counts=True),
)

_BUILTIN_STRATEGIES: Dict[str, StrategyTable] = {
    STANDARD_STRATEGY.name: STANDARD_STRATEGY,
    STRICT_STRATEGY.name: STRICT_STRATEGY,
}


def available_strategies() -> List[str]:
    """Names of the built-in strategy variants."""
    return list(_BUILTIN_STRATEGIES)


def get_strategy(name: str) -> StrategyTable:
    """
    Look up a built-in strategy by name.

    Raises:
        StrategyError: If no variant has that name
    """
    try:
        return _BUILTIN_STRATEGIES[name.lower()]
    except (KeyError, AttributeError):
        raise StrategyError(
            f"Unknown strategy {name!r}, expected one of {available_strategies()}"
        ) from None


# ============= Dict / JSON conversion =============

def _parse_action(value: Any, where: str) -> Action:
    if isinstance(value, Action):
        return value
    if isinstance(value, str):
        if value.upper() in Action.__members__:
            return Action[value.upper()]
        for action in Action:
            if action.value.lower() == value.lower():
                return action
    raise StrategyError(f"{where}: unknown action {value!r}")


def _parse_rank(value: Any, where: str, optional: bool = True) -> Optional[int]:
    if value is None and optional:
        return None
    if isinstance(value, bool):
        raise StrategyError(f"{where}: invalid rank {value!r}")
    if isinstance(value, int) and Rank.TWO <= value <= Rank.ACE:
        return Rank(value)
    if isinstance(value, str) and value.upper() in CHAR_TO_RANK:
        return CHAR_TO_RANK[value.upper()]
    if isinstance(value, str) and value.isdigit():
        return _parse_rank(int(value), where, optional)
    raise StrategyError(f"{where}: invalid rank {value!r}")


def _parse_section(section: str, data: Dict[str, Any], base: Any) -> Any:
    if not isinstance(data, dict):
        raise StrategyError(f"{section}: expected an object, got {type(data).__name__}")

    known = {f.name: f for f in fields(base)}
    changes: Dict[str, Any] = {}
    for key, value in data.items():
        where = f"{section}.{key}"
        if key not in known:
            raise StrategyError(f"{where}: unknown setting")
        current = getattr(base, key)
        if key == "kicker_thresholds":
            changes[key] = _parse_thresholds(value, where)
        elif isinstance(current, Action):
            changes[key] = _parse_action(value, where)
        elif isinstance(current, bool):
            if not isinstance(value, bool):
                raise StrategyError(f"{where}: expected true or false, got {value!r}")
            changes[key] = value
        elif key == "straight_draw_length":
            if isinstance(value, bool) or not isinstance(value, int) or not 2 <= value <= 5:
                raise StrategyError(f"{where}: expected an integer 2-5, got {value!r}")
            changes[key] = value
        else:
            changes[key] = _parse_rank(value, where, optional=key != "pair_min_rank")
    return replace(base, **changes)


def _parse_thresholds(data: Any, where: str) -> Dict[int, KickerThreshold]:
    if not isinstance(data, dict):
        raise StrategyError(f"{where}: expected an object keyed by rank")
    thresholds = {}
    for key, value in data.items():
        high = _parse_rank(key, f"{where}.{key}", optional=False)
        if not isinstance(value, dict) or set(value) - {"suited", "offsuit"}:
            raise StrategyError(f"{where}.{key}: expected {{'suited': rank, 'offsuit': rank}}")
        thresholds[high] = KickerThreshold(
            suited=_parse_rank(value.get("suited"), f"{where}.{key}.suited"),
            offsuit=_parse_rank(value.get("offsuit"), f"{where}.{key}.offsuit"),
        )
    return thresholds


def strategy_from_dict(data: Dict[str, Any], base: Optional[StrategyTable] = None) -> StrategyTable:
    """
    Build a strategy table from a JSON-compatible dict.

    Sections ("pre_flop", "post_flop", "final") override the matching
    fields of base (the standard variant by default); anything left out
    keeps the base value. Actions may be given by name ("RAISE_4X") or
    display value ("Raise 4X"), ranks by value (11) or letter ("J").

    Raises:
        StrategyError: On unknown keys, bad values or actions outside a
            street's vocabulary
    """
    if not isinstance(data, dict):
        raise StrategyError(f"Strategy must be an object, got {type(data).__name__}")
    if base is None:
        base = STANDARD_STRATEGY

    unknown = set(data) - {"name", "pre_flop", "post_flop", "final"}
    if unknown:
        raise StrategyError(f"Unknown strategy sections: {sorted(unknown)}")

    name = data.get("name", "custom")
    if not isinstance(name, str) or not name:
        raise StrategyError(f"Strategy name must be a non-empty string, got {name!r}")

    return StrategyTable(
        name=name,
        pre_flop=_parse_section("pre_flop", data.get("pre_flop", {}), base.pre_flop),
        post_flop=_parse_section("post_flop", data.get("post_flop", {}), base.post_flop),
        final=_parse_section("final", data.get("final", {}), base.final),
    )


def _plain(value: Any) -> Any:
    """Strip IntEnum wrappers for JSON output."""
    return value if value is None or isinstance(value, bool) else int(value)


def _section_to_dict(table: Any) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for f in fields(table):
        value = getattr(table, f.name)
        if isinstance(value, Action):
            result[f.name] = value.name
        elif f.name == "kicker_thresholds":
            result[f.name] = {
                RANK_CHARS[Rank(high)]: {"suited": _plain(limit.suited), "offsuit": _plain(limit.offsuit)}
                for high, limit in sorted(value.items(), reverse=True)
            }
        else:
            result[f.name] = _plain(value)
    return result


def strategy_to_dict(table: StrategyTable) -> Dict[str, Any]:
    """Convert a strategy table to a JSON-compatible dict."""
    return {
        "name": table.name,
        "pre_flop": _section_to_dict(table.pre_flop),
        "post_flop": _section_to_dict(table.post_flop),
        "final": _section_to_dict(table.final),
    }


def load_strategy(path: str) -> StrategyTable:
    """
    Load a strategy table from a JSON file.

    Raises:
        StrategyError: If the file is not valid JSON or not a valid table
        OSError: If the file cannot be read
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise StrategyError(f"Invalid strategy file {path}: {e}") from e
    table = strategy_from_dict(data)
    logger.info(f"Loaded strategy {table.name!r} from {path}")
    return table
