"""Grow each stage towards its sector quota with seeded bursts."""

from __future__ import annotations

import math

from ..level_queries import num_sectors_for_stage, path_starting_positions
from ..models import GenerationContext, GenerationOptions, Level, Position, Stage
from ..rng import random_int, random_value
from ..world_grid import random_directions
from .paths import grow_path, trace_rectangle


def _path_random_seed(level: Level, attempt: int) -> int:
    return level.sector_count * 4 + level.level_ordinal + attempt * 5


def _starting_position(
    seed: int, level: Level, prs: int, options: GenerationOptions
) -> Position | None:
    candidates = path_starting_positions(level, options)
    if not candidates:
        return None
    l = level.level_ordinal
    index = math.floor(random_value(seed * 938 * (l + 60) / prs + 2342 * l) * len(candidates))
    return candidates[index].position


def add_rectangle_burst(
    context: GenerationContext, attempt: int, level: Level, options: GenerationOptions
) -> int:
    """Trace up to four rectangles from one seeded sector; returns how many closed."""
    seed = context.seed
    settings = context.settings
    l = level.level_ordinal
    prs = _path_random_seed(level, attempt)
    start = _starting_position(seed, level, prs, options)
    if start is None:
        return 0

    is_diagonal = random_value(seed + (l * 44) * prs + attempt) < settings.diagonal_path_probability
    count = random_int((seed + prs * l - prs) / (attempt + 5), 1, 5)
    start_directions = random_directions(seed * l + 28381 + prs, count, is_diagonal)
    max_size = settings.path_length_max / 2
    width = random_int(seed + prs / attempt + attempt * l, 4, max_size)
    height = random_int(seed + prs * l + attempt - attempt * l, 4, max_size)

    completed = 0
    for direction in start_directions:
        rectangle = trace_rectangle(level, start, width, height, direction, options=options)
        if not rectangle.completed:
            break
        completed += 1
    return completed


def add_path_burst(
    context: GenerationContext, attempt: int, level: Level, options: GenerationOptions
) -> int:
    """Grow straight legs from one seeded sector; returns the sectors touched."""
    seed = context.seed
    settings = context.settings
    l = level.level_ordinal
    prs = _path_random_seed(level, attempt)
    start = _starting_position(seed, level, prs, options)
    if start is None:
        return 0

    can_be_diagonal = random_value(seed + (l + 70) * prs) < settings.diagonal_path_probability
    directions = random_directions(seed * l + 28381 + prs, 1, can_be_diagonal)
    touched = 0
    for di, direction in enumerate(directions):
        length = random_int(
            seed * 3 * prs * (di + 1) + (di + 3) * l + 55,
            settings.path_length_min,
            settings.path_length_max,
        )
        touched += len(grow_path(level, start, direction, length, options=options).sectors)
    return touched


def fill_stage(context: GenerationContext, level: Level, stage: Stage) -> int:
    """Alternate rectangle and path bursts until ``stage`` passes its quota.

    Returns the number of attempts spent; gives up silently once the
    attempt budget is used.
    """
    quota = num_sectors_for_stage(context.world, level, stage)
    max_attempts = context.settings.stage_fill_max_attempts
    attempts = 0
    while level.num_sectors_by_stage(stage) <= quota and attempts < max_attempts:
        attempts += 1
        cross_stage = attempts > 5 and attempts % 5 == 0 and stage is not Stage.EARLY
        options = GenerationOptions(stage=stage, can_connect_to_different_stage=cross_stage)
        if attempts % 2 != 0:
            add_rectangle_burst(context, attempts, level, options)
        else:
            add_path_burst(context, attempts, level, options)
    return attempts


__all__ = ["add_path_burst", "add_rectangle_burst", "fill_stage"]
