"""Validate and commit single sectors into a level's graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..level_constants import STAGE_CENTER_CLEARANCE, get_max_path_length
from ..level_queries import default_stage
from ..models import (
    DEFAULT_OPTIONS,
    CriticalPathType,
    GenerationOptions,
    Level,
    Position,
    Sector,
    Stage,
)
from ..world_grid import distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    reason: str | None = None


@dataclass(frozen=True)
class SectorResult:
    is_new: bool
    sector: Sector | None


def tag_sector(sector: Sector, options: GenerationOptions) -> None:
    if options.critical_path_type is not None:
        sector.add_to_critical_path(options.critical_path_type)


def is_valid_sector_position(
    level: Level, position: Position, stage: Stage, options: GenerationOptions
) -> ValidationResult:
    # Critical paths may cross into other stages' territory.
    if options.critical_path_type is None:
        for center_stage, centers in level.stage_center_positions.items():
            if center_stage is stage:
                continue
            for center in centers:
                if distance(center, position) < STAGE_CENTER_CLEARANCE:
                    return ValidationResult(False, "stage")
    excursion_len = get_max_path_length(level.camp_ordinal, CriticalPathType.CAMP_TO_POI_2)
    if distance(position, level.level_center_position) > excursion_len:
        return ValidationResult(False, "excursion length")
    return ValidationResult(True)


def create_sector(
    level: Level, position: Position, options: GenerationOptions | None = None
) -> SectorResult:
    """Return the sector at ``position``, creating it when the cell is valid."""
    options = options or DEFAULT_OPTIONS
    position = Position(level.level, position.x, position.y)
    existing = level.get_sector(position.x, position.y)
    if existing is not None:
        tag_sector(existing, options)
        return SectorResult(False, existing)

    stage = options.stage or default_stage(level, position)
    validation = is_valid_sector_position(level, position, stage, options)
    if not validation.is_valid:
        logger.warning("invalid sector pos: %s %s %s", position, stage.value, validation.reason)
        return SectorResult(False, None)

    sector = Sector(
        position,
        stage,
        is_campable=level.is_campable,
        not_campable_reason=level.not_campable_reason,
    )
    sector.is_camp = level.is_camp_position(position)
    sector.is_passage_up = level.is_passage_up_position(position)
    sector.is_passage_down = level.is_passage_down_position(position)
    tag_sector(sector, options)
    created = level.add_sector(sector)
    return SectorResult(created, sector)


def create_add_sector(
    result: list[Sector],
    level: Level,
    position: Position,
    options: GenerationOptions | None = None,
) -> None:
    sector = create_sector(level, position, options).sector
    if sector is not None:
        result.append(sector)


__all__ = [
    "SectorResult",
    "ValidationResult",
    "create_add_sector",
    "create_sector",
    "is_valid_sector_position",
    "tag_sector",
]
