"""Run the structure phases for every level of a world, top to bottom."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from ..config import load_settings, settings_from_config
from ..models import GenerationContext, Level, World
from .central import create_central_structure
from .gap_fill import repair_gaps
from .required_paths import carve_required_paths, derive_required_paths
from .stage_fill import fill_stage

logger = logging.getLogger(__name__)


def create_level_structure(context: GenerationContext, level: Level) -> None:
    family = create_central_structure(context, level)
    required_paths = derive_required_paths(context.world, level)
    carve_required_paths(context, level, required_paths)
    for stage in context.world.get_stages(level):
        fill_stage(context, level, stage)
    gap_rounds = repair_gaps(context, level)
    logger.info(
        "level %s: %s sectors (target %s), central %s, %s required paths, %s gap fills",
        level.level,
        level.sector_count,
        level.num_sectors,
        family,
        len(required_paths),
        gap_rounds,
    )


def prepare_structure(
    seed: int,
    world: World,
    config: Mapping[str, Any] | None = None,
    config_path: Path | None = None,
) -> None:
    """Generate the sector graph of every level in ``world`` in place.

    ``config`` wins when given; otherwise ``config_path`` names a JSON file
    read with :func:`load_config`. Neither means the built-in defaults.
    """
    if config is None and config_path is not None:
        settings = load_settings(config_path)
    else:
        settings = settings_from_config(config)
    context = GenerationContext(seed, world, settings)
    for level in world.levels:
        create_level_structure(context, level)
    world.reset_paths()


__all__ = ["create_level_structure", "prepare_structure"]
