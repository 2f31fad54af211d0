"""Grow straight runs of sectors and trace rectangles out of them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from ..models import GenerationOptions, Level, PathDescriptor, Position, Sector
from ..world_grid import (
    Direction,
    is_horizontal,
    next_clockwise,
    position_on_path,
)
from .sectors import create_sector, tag_sector

# Junctions that would close a cross between two orthogonal runs.
_PERPENDICULAR_PAIRS = (
    (Direction.EAST, Direction.SOUTH),
    (Direction.EAST, Direction.NORTH),
    (Direction.WEST, Direction.SOUTH),
    (Direction.WEST, Direction.NORTH),
)
_MAX_FREE_NEIGHBOURS = 4


@dataclass
class PathResult:
    sectors: list[Sector] = field(default_factory=list)
    completed: bool = False


@dataclass
class RectangleResult:
    sides: list[PathResult] = field(default_factory=list)
    completed: bool = False

    @property
    def sectors(self) -> list[Sector]:
        return [sector for side in self.sides for sector in side.sectors]


def path_descriptor(start_pos: Position, direction: Direction, length: float) -> PathDescriptor:
    return PathDescriptor(start_pos, direction, length)


def _blocks_growth(level: Level, position: Position) -> bool:
    if level.has_sector(position.x, position.y):
        return True
    neighbours = level.get_neighbours(position.x, position.y)
    if len(neighbours) > _MAX_FREE_NEIGHBOURS:
        return True
    return any(a in neighbours and b in neighbours for a, b in _PERPENDICULAR_PAIRS)


def grow_path(
    level: Level,
    start_pos: Position,
    direction: Direction,
    length: float,
    force_complete: bool = False,
    options: GenerationOptions | None = None,
) -> PathResult:
    """Walk ``length`` cells from ``start_pos``, creating sectors as needed.

    Without ``force_complete`` the run stops at the first cell that already
    exists or would form a dense junction; a blocked first cell is skipped
    instead. A cell that fails validation always truncates the run.
    """
    if length < 1:
        return PathResult([], False)
    result: list[Sector] = []
    for step in range(math.ceil(length)):
        position = position_on_path(start_pos, direction, step).on_level(level.level)

        if not force_complete and _blocks_growth(level, position):
            if step > 0:
                return PathResult(result, False)
            continue

        existing = level.get_sector(position.x, position.y)
        if existing is not None:
            if options is not None:
                tag_sector(existing, options)
            result.append(existing)
            continue

        created = create_sector(level, position, options).sector
        if created is None:
            return PathResult(result, False)
        result.append(created)
    return PathResult(result, True)


def rectangle_paths(
    start_pos: Position, width: float, height: float, start_direction: Direction
) -> list[PathDescriptor]:
    """The four sides of a rectangle, turning clockwise at each corner."""
    paths: list[PathDescriptor] = []
    side_start = start_pos
    direction = start_direction
    for _ in range(4):
        side_length = width if is_horizontal(direction) else height
        paths.append(path_descriptor(side_start, direction, side_length))
        side_start = position_on_path(side_start, direction, side_length - 1)
        direction = next_clockwise(direction, False)
    return paths


def rectangle_paths_from_center(
    center: Position, width: float, height: float, is_diagonal: bool = False
) -> list[PathDescriptor]:
    if is_diagonal:
        corner = Position(center.level, center.x, center.y - height + 1)
        return rectangle_paths(corner, width, height, Direction.SE)
    corner = Position.normalized(center.level, center.x - width / 2, center.y - height / 2)
    return rectangle_paths(corner, width, height, Direction.EAST)


def trace_rectangle(
    level: Level,
    start_pos: Position,
    width: float,
    height: float,
    start_direction: Direction,
    force_complete: bool = False,
    options: GenerationOptions | None = None,
) -> RectangleResult:
    """Grow the four sides of a rectangle, stopping at the first blocked side."""
    result = RectangleResult()
    sides = rectangle_paths(start_pos, width, height, start_direction)
    for index, side in enumerate(sides):
        length = side.length
        if index == len(sides) - 1:
            # The closing side ends on the start corner, which already exists.
            length -= 1
            if length < 1:
                result.sides.append(PathResult([], True))
                continue
        grown = grow_path(level, side.start_pos, side.direction, length, force_complete, options)
        result.sides.append(grown)
        if not grown.completed:
            return result
    result.completed = True
    return result


def commit_paths(
    level: Level,
    paths: Iterable[PathDescriptor],
    force_complete: bool = True,
    options: GenerationOptions | None = None,
) -> list[PathResult]:
    return [
        grow_path(level, path.start_pos, path.direction, path.length, force_complete, options)
        for path in paths
    ]


__all__ = [
    "PathResult",
    "RectangleResult",
    "commit_paths",
    "grow_path",
    "path_descriptor",
    "rectangle_paths",
    "rectangle_paths_from_center",
    "trace_rectangle",
]
