"""Level structure constants."""

from __future__ import annotations

from .models import CriticalPathType

SECTOR_PATH_LENGTH_MIN = 3
SECTOR_PATH_LENGTH_MAX = 12
DIAGONAL_PATH_PROBABILITY = 0.15

STAGE_CENTER_CLEARANCE = 2  # other stages' centers keep this much room
DEFAULT_STAGE_MAX_DISTANCE = 18
CENTRAL_RECENTER_DISTANCE = 8
PLAZA_POI_DISTANCE = 8
PASSAGE_DIRECTION_FLIP_LEVEL = 13

STAGE_FILL_MAX_ATTEMPTS = 1000
CONNECT_MAX_ITERATIONS = 100
GAP_FILL_MAX_ROUNDS = 100
GAP_FILL_PATH_THRESHOLD = 15
GAP_FILL_MIN_DISTANCE = 1
GAP_FILL_MAX_DISTANCE = 3

_MAX_PATH_LENGTH_BASE: dict[CriticalPathType, int] = {
    CriticalPathType.CAMP_TO_POI_1: 10,
    CriticalPathType.CAMP_TO_POI_2: 16,
    CriticalPathType.CAMP_TO_PASSAGE: 18,
    CriticalPathType.PASSAGE_TO_CAMP: 18,
    CriticalPathType.PASSAGE_TO_PASSAGE: 26,
}


def get_max_path_length(camp_ordinal: int, path_type: CriticalPathType) -> int:
    """Longest allowed path of ``path_type``; -1 when unbounded."""
    base = _MAX_PATH_LENGTH_BASE.get(path_type)
    if base is None:
        return -1
    return base + max(0, camp_ordinal) // 3


__all__ = [
    "CENTRAL_RECENTER_DISTANCE",
    "CONNECT_MAX_ITERATIONS",
    "DEFAULT_STAGE_MAX_DISTANCE",
    "DIAGONAL_PATH_PROBABILITY",
    "GAP_FILL_MAX_DISTANCE",
    "GAP_FILL_MAX_ROUNDS",
    "GAP_FILL_MIN_DISTANCE",
    "GAP_FILL_PATH_THRESHOLD",
    "PASSAGE_DIRECTION_FLIP_LEVEL",
    "PLAZA_POI_DISTANCE",
    "SECTOR_PATH_LENGTH_MAX",
    "SECTOR_PATH_LENGTH_MIN",
    "STAGE_CENTER_CLEARANCE",
    "STAGE_FILL_MAX_ATTEMPTS",
    "get_max_path_length",
]
