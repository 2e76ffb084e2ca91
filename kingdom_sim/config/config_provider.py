"""
Cached access to the active game configuration.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from kingdom_sim.config.game_config import GameConfig

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SECONDS = 60.0


class ConfigProvider:
    """
    Serves the current GameConfig, re-reading its source once the cached copy
    is older than the freshness window.

    Args:
        source: Callable producing a fresh GameConfig; defaults to the
            built-in configuration
        cache_seconds: Freshness window
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        source: Optional[Callable[[], GameConfig]] = None,
        cache_seconds: float = DEFAULT_CACHE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._source = source or GameConfig
        self._cache_seconds = cache_seconds
        self._clock = clock
        self._cached: Optional[GameConfig] = None
        self._cached_at: Optional[float] = None

    def get_config(self) -> GameConfig:
        now = self._clock()
        if (
            self._cached is not None
            and self._cached_at is not None
            and now - self._cached_at < self._cache_seconds
        ):
            return self._cached

        self._cached = self._source()
        self._cached_at = now
        logger.debug("Game config refreshed")
        return self._cached

    def update_config(self, config: GameConfig) -> None:
        """Replace the cached config; it stays fresh for a full window."""
        self._cached = config
        self._cached_at = self._clock()
        logger.info("Game config updated")

    def clear_cache(self) -> None:
        self._cached = None
        self._cached_at = None
