"""Food placement."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

import numpy as np

from snake_tab.snake import Position

if TYPE_CHECKING:
    from snake_tab.grid import Grid

logger = logging.getLogger(__name__)

_DEFAULT_MAX_ATTEMPTS = 1_000


class FoodSampler:
    """Draws food cells uniformly from the cells the snake does not cover.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Sampling is by rejection up to ``max_attempts`` draws; after that the
    sampler picks directly among the remaining free cells.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int = _DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def sample(self, occupied: Collection[Position]) -> Position | None:
        """Return a free cell, or ``None`` if *occupied* fills the grid."""
        taken = set(occupied)
        if len(taken) < self.grid.cell_count:
            for _ in range(self.max_attempts):
                x, y = self.rng.integers(0, self.grid.size, size=2).tolist()
                pos = Position(x, y)
                if pos not in taken:
                    return pos

        free = self.grid.free_cells(taken)
        if not free:
            logger.warning("No empty cells available for food.")
            return None
        return free[int(self.rng.integers(len(free)))]
