"""Structure generators that carve a level's sector graph."""

# ruff: noqa: F401

from .builder import create_level_structure, prepare_structure
from .central import create_central_structure
from .gap_fill import GapCandidate, find_worst_gap, repair_gaps
from .offsets import ShapeGenerator, find_best_offset
from .paths import (
    PathResult,
    RectangleResult,
    commit_paths,
    grow_path,
    path_descriptor,
    rectangle_paths,
    rectangle_paths_from_center,
    trace_rectangle,
)
from .required_paths import carve_path_between, carve_required_paths, derive_required_paths
from .sectors import (
    SectorResult,
    ValidationResult,
    create_add_sector,
    create_sector,
    is_valid_sector_position,
)
from .stage_fill import add_path_burst, add_rectangle_burst, fill_stage

__all__ = [
    "prepare_structure",
    "create_level_structure",
    "create_central_structure",
    "derive_required_paths",
    "carve_required_paths",
    "carve_path_between",
    "fill_stage",
    "add_rectangle_burst",
    "add_path_burst",
    "find_worst_gap",
    "repair_gaps",
    "GapCandidate",
    "find_best_offset",
    "ShapeGenerator",
    "grow_path",
    "trace_rectangle",
    "commit_paths",
    "path_descriptor",
    "rectangle_paths",
    "rectangle_paths_from_center",
    "PathResult",
    "RectangleResult",
    "create_sector",
    "create_add_sector",
    "is_valid_sector_position",
    "SectorResult",
    "ValidationResult",
]
