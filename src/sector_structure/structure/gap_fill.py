"""Repair detours between sectors that sit close together but connect far apart."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ..models import DEFAULT_OPTIONS, GenerationContext, Level, Sector, World
from ..pathfinding import path_length
from .required_paths import carve_path_between

logger = logging.getLogger(__name__)


@dataclass
class GapCandidate:
    sectors: tuple[Sector, Sector] | None = None
    path_length: int = 0


def _close_pairs(
    sectors: list[Sector], min_distance: float, max_distance: float
) -> list[tuple[int, int]]:
    """Same-stage index pairs ``i < j`` whose distance lies strictly inside the bounds."""
    if len(sectors) < 2:
        return []
    coords = np.array([(s.position.x, s.position.y) for s in sectors], dtype=float)
    stages = np.array([s.stage.value for s in sectors])
    deltas = coords[:, None, :] - coords[None, :, :]
    dists = np.hypot(deltas[..., 0], deltas[..., 1])
    mask = (dists > min_distance) & (dists < max_distance)
    mask &= stages[:, None] == stages[None, :]
    mask &= np.triu(np.ones_like(mask, dtype=bool), k=1)
    rows, cols = np.nonzero(mask)
    return list(zip(rows.tolist(), cols.tolist()))


def find_worst_gap(
    world: World,
    level: Level,
    min_distance: float = 1,
    max_distance: float = 3,
) -> GapCandidate:
    """Return the close same-stage pair with the longest graph path between them."""
    sectors = level.sectors
    worst = GapCandidate()
    for i, j in _close_pairs(sectors, min_distance, max_distance):
        length = path_length(
            world, sectors[i].position, sectors[j].position, allow_diagonal=False
        )
        if length > worst.path_length:
            worst = GapCandidate((sectors[i], sectors[j]), length)
    return worst


def repair_gaps(context: GenerationContext, level: Level) -> int:
    """Carve shortcuts until no close pair detours too far; returns rounds run."""
    world = context.world
    settings = context.settings
    min_distance = settings.gap_fill_min_distance
    max_distance = settings.gap_fill_max_distance

    world.reset_paths()
    worst = find_worst_gap(world, level, min_distance, max_distance)
    rounds = 0
    while (
        worst.path_length > settings.gap_fill_path_threshold
        and rounds < settings.gap_fill_max_rounds
    ):
        first, second = worst.sectors
        logger.debug(
            "level %s gap %s - %s path length %s",
            level.level,
            first.position,
            second.position,
            worst.path_length,
        )
        filled = carve_path_between(
            rounds,
            level,
            first.position,
            second.position,
            -1,
            DEFAULT_OPTIONS,
            settings.connect_max_iterations,
        )
        for sector in filled:
            sector.is_fill = True
        world.reset_paths()
        worst = find_worst_gap(world, level, min_distance, max_distance)
        rounds += 1
        if level.sector_count >= level.max_sectors:
            break
    return rounds


__all__ = ["GapCandidate", "find_worst_gap", "repair_gaps"]
