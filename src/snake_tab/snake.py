"""Directions, grid positions, and snake body helpers."""

from __future__ import annotations

import enum
from typing import NamedTuple


class Position(NamedTuple):
    """A grid cell coordinate."""

    x: int
    y: int


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) unit vectors."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def build_body(
    head: Position,
    direction: Direction = Direction.RIGHT,
    length: int = 3,
) -> tuple[Position, ...]:
    """Lay out a straight snake whose body trails behind *head*.

    The head is element 0; the tail is the last element.
    """
    if length < 1:
        raise ValueError("Snake length must be at least 1.")
    dx, dy = direction.value
    return tuple(
        Position(head.x - dx * i, head.y - dy * i) for i in range(length)
    )


def next_head(body: tuple[Position, ...], direction: Direction) -> Position:
    """Compute the next head position without moving."""
    dx, dy = direction.value
    x, y = body[0]
    return Position(x + dx, y + dy)
