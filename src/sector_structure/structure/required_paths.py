"""Mandatory connections between camps and passages."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ..level_constants import (
    CONNECT_MAX_ITERATIONS,
    PASSAGE_DIRECTION_FLIP_LEVEL,
    get_max_path_length,
)
from ..level_queries import closest_position, closest_sector_pair
from ..models import (
    DEFAULT_OPTIONS,
    CriticalPathType,
    GenerationContext,
    GenerationOptions,
    Level,
    Position,
    RequiredPath,
    Sector,
    Stage,
    World,
)
from ..pathfinding import find_shortest_path
from ..rng import js_mod, random_bool, random_int
from ..world_grid import directions_from, distance, distance_in_direction, position_on_path
from .paths import grow_path
from .sectors import create_add_sector

logger = logging.getLogger(__name__)


def derive_required_paths(world: World, level: Level) -> list[RequiredPath]:
    """List the connections a level must contain before it is filled out.

    With camps: the first camp links to every other camp, then the camp
    nearest each passage links to it. Levels at or below the flip level are
    travelled downwards, which swaps which end counts as the start of the
    trip. Without camps the passages link to each other, or a lone passage
    gets a one-cell path so its sector exists.
    """
    n = level.level
    camps = level.camp_positions
    up = level.passage_up_position
    down = level.passage_down_position
    max_len_p2p = get_max_path_length(level.camp_ordinal, CriticalPathType.PASSAGE_TO_PASSAGE)
    max_len_c2p = get_max_path_length(level.camp_ordinal, CriticalPathType.CAMP_TO_PASSAGE)

    required: list[RequiredPath] = []
    if camps:
        going_down = world.bottom_level <= n <= PASSAGE_DIRECTION_FLIP_LEVEL
        if going_down:
            up_type, up_stage = CriticalPathType.PASSAGE_TO_CAMP, Stage.EARLY
            down_type, down_stage = CriticalPathType.CAMP_TO_PASSAGE, None
        else:
            up_type, up_stage = CriticalPathType.CAMP_TO_PASSAGE, None
            down_type, down_stage = CriticalPathType.PASSAGE_TO_CAMP, Stage.EARLY
        if n == PASSAGE_DIRECTION_FLIP_LEVEL:
            up_type, up_stage = CriticalPathType.CAMP_TO_PASSAGE, None
            down_type, down_stage = CriticalPathType.CAMP_TO_PASSAGE, None

        for camp in camps[1:]:
            required.append(
                RequiredPath(
                    camps[0], camp, -1, CriticalPathType.CAMP_TO_CAMP, Stage.earliest()
                )
            )
        if up is not None:
            camp = closest_position(camps, up)
            required.append(RequiredPath(camp, up, max_len_c2p, up_type, up_stage))
        if down is not None:
            camp = closest_position(camps, down)
            required.append(RequiredPath(camp, down, max_len_c2p, down_type, down_stage))
    elif up is None and down is not None:
        # lone passage: a one-cell path just forces its sector into existence
        required.append(
            RequiredPath(down, down, 1, CriticalPathType.PASSAGE_TO_PASSAGE, Stage.LATE)
        )
    elif down is None and up is not None:
        required.append(RequiredPath(up, up, 1, CriticalPathType.PASSAGE_TO_PASSAGE, Stage.LATE))
    elif up is not None and down is not None:
        required.append(
            RequiredPath(up, down, max_len_p2p, CriticalPathType.PASSAGE_TO_PASSAGE, Stage.LATE)
        )

    for path in required:
        logger.debug(
            "level %s required path %s -> %s (%s)",
            n,
            path.start,
            path.end,
            path.critical_path_type.value,
        )
    return required


def carve_path_between(
    seed: int,
    level: Level,
    start: Position,
    end: Position,
    max_length: int = -1,
    options: GenerationOptions | None = None,
    max_iterations: int = CONNECT_MAX_ITERATIONS,
) -> list[Sector]:
    """Carve forced straight runs from ``start`` until ``end`` is reached.

    Each run heads in a seeded direction that makes progress toward ``end``
    and lasts until that axis lines up. ``max_length`` is recorded by callers
    but not enforced here.
    """
    options = options or DEFAULT_OPTIONS
    n = level.level
    start = start.on_level(n)
    end = end.on_level(n)
    dist = math.ceil(distance(start, end))
    result: list[Sector] = []

    if dist == 0:
        create_add_sector(result, level, start, options)
        return result
    if dist == 1:
        create_add_sector(result, level, start, options)
        create_add_sector(result, level, end, options)
        return result

    allow_diagonals = random_bool(50000 + (n + 5) * 55 + dist * 555)
    current = start
    i = 0
    while current != end:
        directions = directions_from(current, end, allow_diagonals)
        dir_seed = js_mod(seed, 10200) + n * 555 + dist * 77 + i * 1001
        direction = directions[int(random_int(dir_seed, 0, len(directions)))]
        run_length = distance_in_direction(current, end, direction) + 1
        run = grow_path(level, current, direction, run_length, force_complete=True, options=options)
        result.extend(run.sectors)
        if not run.completed:
            break
        current = position_on_path(current, direction, run_length - 1)
        i += 1
        if i > max_iterations:
            break
    return result


def _reconnect(
    context: GenerationContext,
    level: Level,
    start: Position,
    existing: Sequence[Sector],
    carved: Sequence[Sector],
) -> None:
    world = context.world
    world.reset_paths()
    if find_shortest_path(world, start, existing[0].position, allow_diagonal=False) is not None:
        return
    pair = closest_sector_pair(existing, carved)
    if pair is None:
        return
    logger.debug("level %s reconnecting %s to %s", level.level, pair[0].position, pair[1].position)
    carve_path_between(
        context.seed,
        level,
        pair[0].position,
        pair[1].position,
        -1,
        DEFAULT_OPTIONS,
        context.settings.connect_max_iterations,
    )


def carve_required_paths(
    context: GenerationContext, level: Level, required_paths: Sequence[RequiredPath]
) -> None:
    for required in required_paths:
        existing = level.sectors
        options = GenerationOptions(
            stage=required.stage, critical_path_type=required.critical_path_type
        )
        start = required.start.on_level(level.level)
        carved = carve_path_between(
            context.seed,
            level,
            start,
            required.end,
            required.max_length,
            options,
            context.settings.connect_max_iterations,
        )
        if existing:
            _reconnect(context, level, start, existing, carved)


__all__ = ["carve_path_between", "carve_required_paths", "derive_required_paths"]
