"""Real-time driver: fixed-interval ticking and keyboard input."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from snake_tab.config import GameConfig
from snake_tab.engine import GameEngine, GameState, Phase, TickResult
from snake_tab.score_store import JsonScoreStore, MemoryScoreStore, ScoreStore
from snake_tab.snake import Direction

logger = logging.getLogger(__name__)

_DEFAULT_TICK_INTERVAL = 0.150  # seconds

# KeyboardEvent.key values; single letters are matched case-insensitively.
_KEY_DIRECTIONS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}
_SPACE = " "


class GameDriver:
    """Feeds timer ticks and key presses into a :class:`GameEngine`.

    A repeating tick task exists only while the engine is Running: it is
    created on entry to Running and cancelled on game over or reset.
    ``on_change`` is called with the new state after every transition.
    """

    def __init__(
        self,
        engine: GameEngine | None = None,
        store: ScoreStore | None = None,
        on_change: Callable[[GameState], None] | None = None,
        tick_interval: float = _DEFAULT_TICK_INTERVAL,
    ) -> None:
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive.")
        self.engine = engine if engine is not None else GameEngine()
        self.store = store if store is not None else MemoryScoreStore()
        self.on_change = on_change
        self.tick_interval = tick_interval
        self._task: asyncio.Task | None = None

    @classmethod
    def from_config(
        cls,
        config: GameConfig,
        store: ScoreStore | None = None,
        on_change: Callable[[GameState], None] | None = None,
    ) -> GameDriver:
        if store is None:
            store = (
                JsonScoreStore(config.high_score_path)
                if config.high_score_path else MemoryScoreStore()
            )
        return cls(
            engine=GameEngine.from_config(config),
            store=store,
            on_change=on_change,
            tick_interval=config.tick_interval,
        )

    @property
    def state(self) -> GameState:
        return self.engine.state

    @property
    def high_score(self) -> int:
        return self.store.read()

    @property
    def ticking(self) -> bool:
        """Whether a tick task is currently scheduled."""
        return self._task is not None and not self._task.done()

    # --- lifecycle ---

    def start(self) -> GameState:
        """Begin an Idle run and start ticking. Must run inside an event loop."""
        loop = asyncio.get_running_loop()
        before = self.state
        state = self.engine.start()
        if state is not before:
            logger.info("Run started.")
            self._start_ticking(loop)
            self._notify()
        return state

    def reset(self) -> GameState:
        """Stop ticking and replace the run with a fresh Idle one."""
        self._stop_ticking()
        state = self.engine.reset()
        self._notify()
        return state

    def change_direction(self, direction: Direction) -> GameState:
        before = self.state
        state = self.engine.change_direction(direction)
        if state is not before:
            self._notify()
        return state

    def advance(self) -> TickResult:
        """Run one engine tick and handle a resulting game over."""
        before = self.state
        result = self.engine.tick()
        if result.game_over:
            self._stop_ticking()
            self._record_score(result.state.score)
        if result.state is not before:
            self._notify()
        return result

    def close(self) -> None:
        """Cancel any pending tick task."""
        self._stop_ticking()

    # --- input ---

    def handle_key(self, key: str) -> bool:
        """Apply a key press. Returns True if the key is bound to the game."""
        direction = _KEY_DIRECTIONS.get(key.lower() if len(key) == 1 else key)
        if direction is not None:
            self.change_direction(direction)
            return True
        if key == _SPACE:
            phase = self.engine.phase
            if phase is Phase.TERMINATED:
                self.reset()
            elif phase is Phase.IDLE:
                self.start()
            return True
        return False

    # --- internals ---

    def _record_score(self, score: int) -> None:
        best = self.store.read()
        if score > best:
            self.store.write(score)
            logger.info("New high score %d (previous %d).", score, best)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.state)

    def _start_ticking(self, loop: asyncio.AbstractEventLoop) -> None:
        self._stop_ticking()
        self._task = loop.create_task(self._tick_loop())

    def _stop_ticking(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # A game over detected inside the loop ends it by its own check.
        if task is not current:
            task.cancel()

    async def _tick_loop(self) -> None:
        try:
            while self.engine.phase is Phase.RUNNING:
                await asyncio.sleep(self.tick_interval)
                # Guard against a wake-up after the run left Running.
                if self.engine.phase is not Phase.RUNNING:
                    break
                self.advance()
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled.")
        except Exception:
            logger.exception("Tick loop error.")
            self._abort_run()

    def _abort_run(self) -> None:
        """End a run whose tick loop failed, exactly as a collision would."""
        self._task = None
        if self.engine.phase is not Phase.RUNNING:
            return
        state = self.engine.terminate()
        self._record_score(state.score)
        logger.info("Run ended after a tick loop error with score %d.", state.score)
        try:
            self._notify()
        except Exception:
            logger.exception("Change callback failed after a tick loop error.")
