"""Square play-field geometry."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from snake_tab.snake import Position

GRID_SIZE = 20


class Grid:
    """A square grid of ``size`` x ``size`` cells.

    Occupancy queries go through a NumPy boolean mask indexed ``[y, x]``
    so free-cell enumeration stays vectorised.
    """

    def __init__(self, size: int = GRID_SIZE) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def in_bounds(self, pos: Position) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def occupancy(self, occupied: Iterable[Position]) -> np.ndarray:
        """Return a ``(size, size)`` mask that is True on occupied cells."""
        mask = np.zeros((self.size, self.size), dtype=bool)
        for x, y in occupied:
            mask[y, x] = True
        return mask

    def free_cells(self, occupied: Iterable[Position]) -> list[Position]:
        """Return every cell not present in *occupied*, in row-major order."""
        ys, xs = np.where(~self.occupancy(occupied))
        return [
            Position(x, y)
            for x, y in zip(xs.tolist(), ys.tolist(), strict=True)
        ]
