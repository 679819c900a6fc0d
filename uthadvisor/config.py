"""
Runtime settings for the advisor server.

Settings come from environment variables so that `run.py`, uvicorn's
reloader and tests all see the same configuration:

    UTH_STRATEGY       built-in strategy name (default "standard")
    UTH_STRATEGY_FILE  JSON strategy file, takes precedence over UTH_STRATEGY
    UTH_STATS_FILE     stats file (default ~/.uthadvisor/stats.json)
    UTH_STATS_KEY      key the stats are stored under (default "holdemStats")
    UTH_LOG_LEVEL      logging level name (default INFO)
"""

from __future__ import annotations
from typing import Mapping, Optional
from dataclasses import dataclass
import os

from uthadvisor.core.rules import DEFAULT_STRATEGY, DEFAULT_STATS_KEY
from uthadvisor.core.strategy import StrategyTable, get_strategy, load_strategy


DEFAULT_STATS_FILE = os.path.join("~", ".uthadvisor", "stats.json")
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Server configuration."""
    strategy: str = DEFAULT_STRATEGY
    strategy_file: Optional[str] = None
    stats_file: str = DEFAULT_STATS_FILE
    stats_key: str = DEFAULT_STATS_KEY
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """Read settings from environment variables (os.environ by default)."""
        if environ is None:
            environ = os.environ
        return cls(
            strategy=environ.get("UTH_STRATEGY", DEFAULT_STRATEGY),
            strategy_file=environ.get("UTH_STRATEGY_FILE") or None,
            stats_file=environ.get("UTH_STATS_FILE", DEFAULT_STATS_FILE),
            stats_key=environ.get("UTH_STATS_KEY", DEFAULT_STATS_KEY),
            log_level=environ.get("UTH_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )

    def load_strategy(self) -> StrategyTable:
        """
        Resolve the configured strategy: the file if set, else the named variant.

        Raises:
            StrategyError: If the name is unknown or the file is invalid
        """
        if self.strategy_file:
            return load_strategy(self.strategy_file)
        return get_strategy(self.strategy)
