"""Grid geometry: directions, distances and straight runs of cells."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Iterable

from .models import Position
from .rng import pick_distinct


class Direction(IntEnum):
    NORTH = 1
    NE = 2
    EAST = 3
    SE = 4
    SOUTH = 5
    SW = 6
    WEST = 7
    NW = 8


# Clockwise, starting north. Y grows towards the south.
ALL_DIRECTIONS: tuple[Direction, ...] = tuple(Direction)
ORTHOGONAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)
DIAGONAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.NE,
    Direction.SE,
    Direction.SW,
    Direction.NW,
)

_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.NE: (1, -1),
    Direction.EAST: (1, 0),
    Direction.SE: (1, 1),
    Direction.SOUTH: (0, 1),
    Direction.SW: (-1, 1),
    Direction.WEST: (-1, 0),
    Direction.NW: (-1, -1),
}


def direction_vector(direction: Direction) -> tuple[int, int]:
    return _VECTORS[direction]


def is_diagonal(direction: Direction) -> bool:
    return direction in DIAGONAL_DIRECTIONS


def is_horizontal(direction: Direction) -> bool:
    return direction in (Direction.EAST, Direction.WEST)


def opposite_direction(direction: Direction) -> Direction:
    return ALL_DIRECTIONS[(ALL_DIRECTIONS.index(direction) + 4) % 8]


def next_clockwise(direction: Direction, include_diagonals: bool) -> Direction:
    """Turn clockwise by 45 degrees, or by 90 degrees within the same family."""
    step = 1 if include_diagonals else 2
    return ALL_DIRECTIONS[(ALL_DIRECTIONS.index(direction) + step) % 8]


def distance(a: Position, b: Position) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def position_on_path(start: Position, direction: Direction, steps: float) -> Position:
    dx, dy = _VECTORS[direction]
    return Position.normalized(start.level, start.x + dx * steps, start.y + dy * steps)


def middle_point(positions: Iterable[Position]) -> Position:
    points = list(positions)
    if not points:
        raise ValueError("middle_point needs at least one position")
    x = sum(point.x for point in points) / len(points)
    y = sum(point.y for point in points) / len(points)
    return Position.normalized(points[0].level, x, y)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def directions_from(start: Position, end: Position, allow_diagonal: bool) -> list[Direction]:
    """Directions whose first step from ``start`` makes progress toward ``end``."""
    sx = _sign(end.x - start.x)
    sy = _sign(end.y - start.y)
    result: list[Direction] = []
    for direction in ALL_DIRECTIONS:
        vx, vy = _VECTORS[direction]
        if is_diagonal(direction):
            if allow_diagonal and sx != 0 and sy != 0 and (vx, vy) == (sx, sy):
                result.append(direction)
        elif (vx != 0 and vx == sx) or (vy != 0 and vy == sy):
            result.append(direction)
    return result


def distance_in_direction(start: Position, end: Position, direction: Direction) -> int:
    """Number of steps along ``direction`` before overshooting ``end`` on any axis."""
    dx = abs(end.x - start.x)
    dy = abs(end.y - start.y)
    if is_diagonal(direction):
        return min(dx, dy)
    if is_horizontal(direction):
        return dx
    return dy


def is_on_path(point: Position, start: Position, direction: Direction, length: float) -> bool:
    if point.level != start.level:
        return False
    vx, vy = _VECTORS[direction]
    rx = point.x - start.x
    ry = point.y - start.y
    steps: set[int] = set()
    for delta, unit in ((rx, vx), (ry, vy)):
        if unit == 0:
            if delta != 0:
                return False
        else:
            steps.add(delta * unit)
    if len(steps) != 1:
        return False
    step = steps.pop()
    return 0 <= step < length


def offsets_in_area(radius: int) -> list[tuple[int, int]]:
    """Every integer offset of the inclusive square of ``radius``, x-major."""
    return [
        (dx, dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-radius, radius + 1)
    ]


def random_directions(seed: float, count: int, include_diagonals: bool) -> list[Direction]:
    pool = ALL_DIRECTIONS if include_diagonals else ORTHOGONAL_DIRECTIONS
    return pick_distinct(seed, pool, count)


__all__ = [
    "ALL_DIRECTIONS",
    "DIAGONAL_DIRECTIONS",
    "Direction",
    "ORTHOGONAL_DIRECTIONS",
    "direction_vector",
    "directions_from",
    "distance",
    "distance_in_direction",
    "is_diagonal",
    "is_horizontal",
    "is_on_path",
    "middle_point",
    "next_clockwise",
    "offsets_in_area",
    "opposite_direction",
    "position_on_path",
    "random_directions",
]
