"""Read-only queries over level metadata and sector lists."""

from __future__ import annotations

from typing import Iterable, Sequence

from .level_constants import DEFAULT_STAGE_MAX_DISTANCE
from .models import GenerationOptions, Level, Position, Sector, Stage, World
from .world_grid import distance


def num_sectors_for_stage(world: World, level: Level, stage: Stage) -> int:
    """Sector quota of ``stage``: explicit when given, else an even share."""
    quota = level.stage_sector_quotas.get(stage)
    if quota is not None:
        return quota
    stages = world.get_stages(level)
    return level.num_sectors // max(1, len(stages))


def closest_position(positions: Iterable[Position], target: Position) -> Position | None:
    best: Position | None = None
    best_dist = -1.0
    for position in positions:
        dist = distance(position, target)
        if best is None or dist < best_dist:
            best = position
            best_dist = dist
    return best


def closest_sector_pair(
    sectors_a: Sequence[Sector], sectors_b: Sequence[Sector]
) -> tuple[Sector, Sector] | None:
    best: tuple[Sector, Sector] | None = None
    best_dist = -1.0
    for sector_a in sectors_a:
        for sector_b in sectors_b:
            dist = distance(sector_a.position, sector_b.position)
            if best is None or dist < best_dist:
                best = (sector_a, sector_b)
                best_dist = dist
    return best


def default_stage(level: Level, position: Position) -> Stage:
    """Stage of the nearest stage center; LATE when none is close enough."""
    result: Stage | None = None
    shortest = -1.0
    for stage in Stage:
        for center in level.stage_center_positions.get(stage, []):
            dist = distance(center, position)
            if shortest < 0 or dist < shortest:
                result = stage
                shortest = dist
    if result is None or shortest > DEFAULT_STAGE_MAX_DISTANCE:
        return Stage.LATE
    return result


def path_starting_positions(level: Level, options: GenerationOptions) -> list[Sector]:
    if options.stage is None or options.can_connect_to_different_stage:
        return level.sectors
    stage_sectors = level.sectors_by_stage(options.stage)
    if stage_sectors:
        return stage_sectors
    return level.sectors


__all__ = [
    "closest_position",
    "closest_sector_pair",
    "default_stage",
    "num_sectors_for_stage",
    "path_starting_positions",
]
