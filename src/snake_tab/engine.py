"""Tick-based game engine for a single snake."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace

import numpy as np

from snake_tab.config import GameConfig
from snake_tab.food import FoodSampler
from snake_tab.grid import GRID_SIZE, Grid
from snake_tab.snake import Direction, Position, build_body, next_head

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    """Coarse lifecycle of a run."""

    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of one run.

    ``snake`` is ordered head first. ``food`` is only ``None`` once the
    snake covers every cell.
    """

    snake: tuple[Position, ...]
    food: Position | None
    direction: Direction = Direction.RIGHT
    score: int = 0
    is_playing: bool = False
    is_game_over: bool = False

    @property
    def phase(self) -> Phase:
        if self.is_game_over:
            return Phase.TERMINATED
        if self.is_playing:
            return Phase.RUNNING
        return Phase.IDLE

    @property
    def head(self) -> Position:
        return self.snake[0]

    def to_dict(self) -> dict:
        """Return a JSON-serializable view of the state."""
        return {
            "snake": [list(seg) for seg in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "direction": self.direction.name,
            "score": self.score,
            "is_playing": self.is_playing,
            "is_game_over": self.is_game_over,
            "phase": self.phase.value,
        }


@dataclass(frozen=True)
class TickResult:
    """Outcome of :meth:`GameEngine.tick`."""

    state: GameState
    game_over: bool = False

    @property
    def final_score(self) -> int | None:
        return self.state.score if self.game_over else None


class GameEngine:
    """Finite-state machine over :class:`GameState`.

    :meth:`reset`, :meth:`start`, :meth:`change_direction` and
    :meth:`tick` are the only mutators. Each replaces :attr:`state` with
    a new snapshot and returns it; calls that are not valid in the
    current phase return the state unchanged.
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        food_reward: int = 10,
        initial_length: int = 3,
        seed: int | None = None,
        sampler: FoodSampler | None = None,
    ) -> None:
        self.grid = Grid(grid_size)
        if initial_length > grid_size // 2 + 1:
            raise ValueError("initial_length does not fit the grid.")
        self.food_reward = food_reward
        self.initial_length = initial_length
        self.sampler = sampler if sampler is not None else FoodSampler(
            self.grid, rng=np.random.default_rng(seed),
        )
        self.state = self.reset()

    @classmethod
    def from_config(cls, config: GameConfig) -> GameEngine:
        return cls(
            grid_size=config.grid_size,
            food_reward=config.food_reward,
            initial_length=config.initial_length,
            seed=config.seed,
        )

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def reset(self) -> GameState:
        """Start over: centred snake heading right, fresh food, Idle."""
        centre = self.grid.size // 2
        snake = build_body(
            Position(centre, centre), Direction.RIGHT, self.initial_length,
        )
        self.state = GameState(snake=snake, food=self.sampler.sample(snake))
        return self.state

    def start(self) -> GameState:
        """Move an Idle run into Running."""
        if self.state.phase is Phase.IDLE:
            self.state = replace(self.state, is_playing=True)
            logger.debug("Run started.")
        return self.state

    def change_direction(self, direction: Direction) -> GameState:
        """Commit a new heading for the next tick, ignoring 180° reversals."""
        state = self.state
        if state.phase is not Phase.RUNNING:
            return state
        if direction is state.direction.opposite:
            return state
        if direction is not state.direction:
            self.state = replace(state, direction=direction)
        return self.state

    def terminate(self) -> GameState:
        """End a Running run without moving, keeping snake and score."""
        if self.state.phase is Phase.RUNNING:
            self.state = replace(self.state, is_game_over=True)
        return self.state

    def tick(self) -> TickResult:
        """Advance the run by one cell."""
        state = self.state
        if state.phase is not Phase.RUNNING:
            return TickResult(state)

        new_head = next_head(state.snake, state.direction)

        # --- wall and self collision ---
        # The whole pre-move body counts, including the tail cell that a
        # plain move would vacate.
        if not self.grid.in_bounds(new_head) or new_head in state.snake:
            self.state = replace(state, is_game_over=True)
            logger.info("Snake died with score %d.", state.score)
            return TickResult(self.state, game_over=True)

        if new_head == state.food:
            snake = (new_head, *state.snake)
            self.state = replace(
                state,
                snake=snake,
                food=self.sampler.sample(snake),
                score=state.score + self.food_reward,
            )
        else:
            self.state = replace(state, snake=(new_head, *state.snake[:-1]))
        return TickResult(self.state)
