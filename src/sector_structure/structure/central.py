"""Central structure: the primary spine laid down near the level center.

One seeded draw picks a shape family. Every family except the plaza is a
shape generator (a pure function of an ``(dx, dy)`` offset) so it can be
shifted onto the passages before it is carved.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..level_constants import CENTRAL_RECENTER_DISTANCE, PLAZA_POI_DISTANCE
from ..level_queries import closest_position
from ..models import GenerationContext, Level, PathDescriptor, Position
from ..rng import js_mod, js_round, random_bool, random_int, random_value
from ..world_grid import (
    Direction,
    distance,
    is_diagonal,
    middle_point,
    next_clockwise,
    opposite_direction,
    position_on_path,
    random_directions,
)
from .offsets import ShapeGenerator, find_best_offset
from .paths import commit_paths, path_descriptor, rectangle_paths_from_center
from .sectors import create_sector

logger = logging.getLogger(__name__)

# Cumulative upper bounds of the family bands; the last family takes the rest.
_FAMILY_BANDS = (
    (0.15, "parallels"),
    (0.30, "crossings"),
    (0.45, "plaza"),
    (0.60, "rectangles_side"),
    (0.70, "rectangles_nested"),
)
_DEFAULT_FAMILY = "rectangles_simple"

PARALLELS_MAX_OFFSET = 3
CROSSINGS_MAX_OFFSET = 5
RECTANGLES_SIDE_MAX_OFFSET = 4
RECTANGLES_NESTED_MAX_OFFSET = 4
RECTANGLES_SIMPLE_MAX_OFFSET = 5


@dataclass(frozen=True)
class ParallelStreets:
    position: Position
    count: int
    length: float
    direction: Direction
    spacing: int
    connector_offset: float

    def _street_center(self, index: int, dx: int, dy: int) -> Position:
        street_dist = -(self.count - 1) * self.spacing / 2 + index * self.spacing
        perpendicular = next_clockwise(next_clockwise(self.direction, True), True)
        return position_on_path(self.position, perpendicular, street_dist).offset(dx, dy)

    def paths_at_offset(self, dx: int, dy: int) -> list[PathDescriptor]:
        opposite = opposite_direction(self.direction)
        perpendicular = next_clockwise(next_clockwise(self.direction, True), True)
        paths = []
        for index in range(self.count):
            center = self._street_center(index, dx, dy)
            start = position_on_path(center, opposite, math.floor(self.length / 2))
            paths.append(path_descriptor(start, self.direction, self.length))
        if self.count > 1:
            connection = position_on_path(
                self._street_center(0, dx, dy), opposite, self.connector_offset
            )
            paths.append(
                path_descriptor(connection, perpendicular, self.spacing * (self.count - 1) + 1)
            )
        return paths


@dataclass(frozen=True)
class CrossingStreets:
    position: Position
    count_x: int
    count_y: int
    length_x: int
    spacing_x: int
    length_y: int
    spacing_y: int

    def paths_at_offset(self, dx: int, dy: int) -> list[PathDescriptor]:
        level, px, py = self.position.level, self.position.x + dx, self.position.y + dy
        paths = []
        for i in range(self.count_x):
            start = Position.normalized(
                level,
                px - self.length_x / 2,
                py - (self.count_x - 1) * self.spacing_x / 2 + i * self.spacing_x,
            )
            paths.append(path_descriptor(start, Direction.EAST, self.length_x))
        for j in range(self.count_y):
            start = Position.normalized(
                level,
                px - (self.count_y - 1) * self.spacing_y / 2 + j * self.spacing_y,
                py - self.length_y / 2,
            )
            paths.append(path_descriptor(start, Direction.SOUTH, self.length_y))
        return paths


@dataclass(frozen=True)
class SideBySideRectangles:
    position: Position
    size: int
    distance: int
    horizontal: bool
    connected: bool
    connector_position: float

    def paths_at_offset(self, dx: int, dy: int) -> list[PathDescriptor]:
        pos = self.position.offset(dx, dy)
        x = self.distance if self.horizontal else 0
        y = 0 if self.horizontal else self.distance
        paths = rectangle_paths_from_center(pos.offset(x, y), self.size, self.size)
        paths += rectangle_paths_from_center(pos.offset(-x, -y), self.size, self.size)
        if not self.connected:
            connector_dist = math.ceil(-self.distance + self.size / 2)
            if self.horizontal:
                start = pos.offset(connector_dist, self.connector_position)
                direction = Direction.EAST
            else:
                start = pos.offset(self.connector_position, connector_dist)
                direction = Direction.SOUTH
            paths.append(path_descriptor(start, direction, self.distance))
        return paths


@dataclass(frozen=True)
class NestedRectangles:
    position: Position
    inner_size: float
    outer_size: float
    is_diagonal: bool
    spoke_directions: tuple[Direction, ...]

    def paths_at_offset(self, dx: int, dy: int) -> list[PathDescriptor]:
        pos = self.position.offset(dx, dy)
        inner, outer = self.inner_size, self.outer_size
        paths = rectangle_paths_from_center(pos, inner, inner, self.is_diagonal)
        paths += rectangle_paths_from_center(pos, outer, outer, self.is_diagonal)
        for direction in self.spoke_directions:
            start = position_on_path(pos, direction, js_round(self.inner_size / 2))
            length = self.outer_size / 2 - self.inner_size / 2
            if self.is_diagonal and not is_diagonal(direction):
                length = self.outer_size - self.inner_size
            paths.append(path_descriptor(start, direction, length))
        return paths


@dataclass(frozen=True)
class SimpleRectangle:
    position: Position
    size: int
    is_diagonal: bool

    def paths_at_offset(self, dx: int, dy: int) -> list[PathDescriptor]:
        pos = self.position.offset(dx, dy)
        return rectangle_paths_from_center(pos, self.size, self.size, self.is_diagonal)


def central_seeds(seed: int, level: Level) -> tuple[int, int, int, int]:
    """Return ``(s1, s2, s3, sr)`` for the level's central structure."""
    l = level.level
    s1 = (js_mod(seed, 4) + 1) * 11 + (l + 9) * 666
    s2 = (js_mod(seed, 6) + 1) * 9 + (l + 7) * 331
    s3 = (js_mod(seed, 3) + 1) * 5 + (l + 11) * 561
    sr = 10000 + js_mod(seed, 100) + l * 66 + level.camp_ordinal * 22 + level.num_sectors
    return s1, s2, s3, sr


def choose_family(sr: float) -> str:
    roll = random_value(sr)
    for upper, family in _FAMILY_BANDS:
        if roll < upper:
            return family
    return _DEFAULT_FAMILY


def central_position(level: Level) -> Position:
    center = Position(level.level, 0, 0)
    if distance(center, level.level_center_position) > CENTRAL_RECENTER_DISTANCE:
        return middle_point([center, level.level_center_position.on_level(level.level)])
    return center


def parallel_streets(s1: float, s2: float, level: Level, position: Position) -> ParallelStreets:
    # fewer streets on levels with few sectors overall
    max_streets = min(4, js_round(level.num_sectors / 25))
    count = random_int(s1, 2, max_streets + 1)
    min_len = min(11 + (max_streets - count) * 2, level.num_sectors / 10)
    max_len_step = min(5, js_round(level.num_sectors / 20))
    length = min_len + random_int(s2, 0, max_len_step) * 2
    direction = random_directions(s2 / 2, 1, count < 3)[0]
    spacing = 3 + random_int(s1, 0, 4)
    connector_offset = random_int(s1, -length / 3, length / 3)
    return ParallelStreets(position, count, length, direction, spacing, connector_offset)


def crossing_streets(s1: float, s2: float, position: Position) -> CrossingStreets:
    return CrossingStreets(
        position,
        count_x=random_int(s1, 1, 3),
        count_y=random_int(s2, 1, 3),
        length_x=7 + random_int(s2, 0, 7) * 2,
        spacing_x=2 + random_int(s1, 0, 6),
        length_y=7 + random_int(s1, 0, 7) * 2,
        spacing_y=2 + random_int(s2, 0, 6),
    )


def side_by_side_rectangles(s1: float, s2: float, position: Position) -> SideBySideRectangles:
    connected = random_bool(s1)
    horizontal = random_bool(s2)
    size = 5 + random_int(s2, 0, 2) * 2
    min_dist = size // 2
    dist = min_dist if connected else min_dist + random_int(s2, 1, 3) * 2
    connector_position = random_int(s1, math.ceil(-dist / 2), math.floor(dist / 2))
    return SideBySideRectangles(position, size, dist, horizontal, connected, connector_position)


def nested_rectangles(
    s1: float, s2: float, s3: float, level: Level, position: Position
) -> NestedRectangles:
    diagonal = random_value(s1) < 0.15
    min_size = 3
    max_size = level.num_sectors / 10
    max_step = math.floor(max_size - min_size) / 2
    inner = min_size + random_int(s1, 0, min(5, max_step)) * 2
    outer = inner + 4 + random_int(s2, 0, 4) * 2
    num_spokes = random_int(s3, 2, 4)
    spokes = tuple(random_directions(s3 + i * 1001, 1, True)[0] for i in range(num_spokes))
    return NestedRectangles(position, inner, outer, diagonal, spokes)


def simple_rectangle(s1: float, s2: float, position: Position) -> SimpleRectangle:
    diagonal = random_value(s1) < 0.25
    size = 5 + random_int(s2, 0, 5) * 2
    return SimpleRectangle(position, size, diagonal)


def _place_shape(
    level: Level, shape: ShapeGenerator, max_offset: int, pois: list[Position]
) -> None:
    dx, dy = find_best_offset(max_offset, pois, shape)
    commit_paths(level, shape.paths_at_offset(dx, dy), force_complete=True)


def create_plaza(
    s1: float, s2: float, level: Level, position: Position, pois: list[Position]
) -> None:
    """Small forced square near the closest passage plus four detached corners."""
    center = position
    poi = closest_position(pois, position)
    if poi is not None and distance(position, poi) < PLAZA_POI_DISTANCE:
        center = Position.normalized(
            level.level, poi.x + random_int(s1, -1, 2), poi.y + random_int(s2, -1, 2)
        )
    size = 3
    corner = size // 2 + 1
    commit_paths(level, rectangle_paths_from_center(center, size, size), force_complete=True)
    for cx, cy in ((corner, corner), (-corner, corner), (-corner, -corner), (corner, -corner)):
        create_sector(level, center.offset(cx, cy))


def create_central_structure(context: GenerationContext, level: Level) -> str:
    """Carve the level's central structure and return the chosen family name."""
    s1, s2, s3, sr = central_seeds(context.seed, level)
    position = central_position(level)
    pois = [
        anchor.on_level(level.level)
        for anchor in (level.passage_up_position, level.passage_down_position)
        if anchor is not None
    ]
    family = choose_family(sr)
    logger.debug("level %s central structure: %s at %s", level.level, family, position)

    if family == "plaza":
        create_plaza(s1, s2, level, position, pois)
        return family

    shape: ShapeGenerator
    if family == "parallels":
        shape, max_offset = parallel_streets(s1, s2, level, position), PARALLELS_MAX_OFFSET
    elif family == "crossings":
        shape, max_offset = crossing_streets(s1, s2, position), CROSSINGS_MAX_OFFSET
    elif family == "rectangles_side":
        shape, max_offset = side_by_side_rectangles(s1, s2, position), RECTANGLES_SIDE_MAX_OFFSET
    elif family == "rectangles_nested":
        shape = nested_rectangles(s1, s2, s3, level, position)
        max_offset = RECTANGLES_NESTED_MAX_OFFSET
    else:
        shape, max_offset = simple_rectangle(s1, s2, position), RECTANGLES_SIMPLE_MAX_OFFSET
    _place_shape(level, shape, max_offset, pois)
    return family


__all__ = [
    "CrossingStreets",
    "NestedRectangles",
    "ParallelStreets",
    "SideBySideRectangles",
    "SimpleRectangle",
    "central_position",
    "central_seeds",
    "choose_family",
    "create_central_structure",
    "create_plaza",
    "crossing_streets",
    "nested_rectangles",
    "parallel_streets",
    "side_by_side_rectangles",
    "simple_rectangle",
]
