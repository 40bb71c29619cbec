"""Registry of live play sessions, one driver per socket."""

from __future__ import annotations

import logging
from collections.abc import Callable

from snake_tab.config import GameConfig
from snake_tab.driver import GameDriver
from snake_tab.engine import GameState
from snake_tab.score_store import JsonScoreStore, MemoryScoreStore, ScoreStore

logger = logging.getLogger(__name__)


class SessionManager:
    """Creates drivers that share one best-score store."""

    def __init__(
        self,
        config: GameConfig | None = None,
        store: ScoreStore | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        if store is None:
            store = (
                JsonScoreStore(self.config.high_score_path)
                if self.config.high_score_path else MemoryScoreStore()
            )
        self.store = store
        self._drivers: set[GameDriver] = set()

    @property
    def session_count(self) -> int:
        return len(self._drivers)

    def open_session(
        self, on_change: Callable[[GameState], None] | None = None,
    ) -> GameDriver:
        driver = GameDriver.from_config(
            self.config, store=self.store, on_change=on_change,
        )
        self._drivers.add(driver)
        logger.info("Session opened (%d live).", len(self._drivers))
        return driver

    def close_session(self, driver: GameDriver) -> None:
        driver.close()
        if driver in self._drivers:
            self._drivers.discard(driver)
            logger.info("Session closed (%d live).", len(self._drivers))

    async def cleanup(self) -> None:
        """Stop every session's tick task."""
        for driver in list(self._drivers):
            driver.close()
        self._drivers.clear()
        logger.info("SessionManager cleanup complete.")
