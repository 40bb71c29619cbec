"""Cell classification and board snapshots consumed by the page."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

import numpy as np

from snake_tab.grid import GRID_SIZE

if TYPE_CHECKING:
    from snake_tab.engine import GameState


class CellKind(enum.IntEnum):
    """Integer codes stored in the classified board."""

    EMPTY = 0
    FOOD = 1
    HEAD = 2
    BODY = 3


def classify_cells(
    state: GameState, grid_size: int = GRID_SIZE,
) -> tuple[np.ndarray, np.ndarray]:
    """Classify every cell of the board.

    Returns ``(kinds, body_index)``, both shaped ``(grid_size, grid_size)``
    and indexed ``[y, x]``. ``body_index`` holds the segment index for
    snake cells (0 for the head) and -1 elsewhere.
    """
    kinds = np.full((grid_size, grid_size), CellKind.EMPTY, dtype=np.int8)
    body_index = np.full((grid_size, grid_size), -1, dtype=np.int16)

    if state.food is not None:
        kinds[state.food.y, state.food.x] = CellKind.FOOD

    # Paint tail first so the head wins if a terminal state overlaps.
    for i in range(len(state.snake) - 1, -1, -1):
        x, y = state.snake[i]
        if not (0 <= x < grid_size and 0 <= y < grid_size):
            continue
        kinds[y, x] = CellKind.HEAD if i == 0 else CellKind.BODY
        body_index[y, x] = i
    return kinds, body_index


def snapshot(
    state: GameState, high_score: int, grid_size: int = GRID_SIZE,
) -> dict:
    """Return the full, serializable board the page draws from."""
    kinds, _ = classify_cells(state, grid_size)
    payload = state.to_dict()
    payload.update({
        "grid_size": grid_size,
        "cells": kinds.tolist(),
        "high_score": max(high_score, 0),
    })
    return payload
