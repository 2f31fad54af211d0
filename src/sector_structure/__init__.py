"""Seeded generation of multi-level sector layouts."""

# ruff: noqa: F401

from .config import (
    GeneratorSettings,
    load_config,
    load_settings,
    save_config,
    settings_from_config,
)
from .models import (
    CriticalPathType,
    GenerationContext,
    GenerationOptions,
    Level,
    PathDescriptor,
    Position,
    RequiredPath,
    Sector,
    Stage,
    World,
)
from .overview import format_level
from .structure import create_level_structure, prepare_structure

__version__ = "0.1.0"

__all__ = [
    "prepare_structure",
    "create_level_structure",
    "format_level",
    "GeneratorSettings",
    "load_config",
    "load_settings",
    "save_config",
    "settings_from_config",
    "CriticalPathType",
    "GenerationContext",
    "GenerationOptions",
    "Level",
    "PathDescriptor",
    "Position",
    "RequiredPath",
    "Sector",
    "Stage",
    "World",
]
