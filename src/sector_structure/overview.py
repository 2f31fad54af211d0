"""Plain-text overview of a level's sector graph for debugging."""

from __future__ import annotations

import numpy as np

from .models import Level, Sector

EMPTY_MARK = "."
CAMP_MARK = "C"
PASSAGE_UP_MARK = "U"
PASSAGE_DOWN_MARK = "D"
FILL_MARK = "+"


def sector_mark(sector: Sector) -> str:
    if sector.is_camp:
        return CAMP_MARK
    if sector.is_passage_up:
        return PASSAGE_UP_MARK
    if sector.is_passage_down:
        return PASSAGE_DOWN_MARK
    if sector.is_fill:
        return FILL_MARK
    return sector.stage.value


def format_level(level: Level) -> list[str]:
    """Return the rows of the level's bounding box, north first."""
    sectors = level.sectors
    if not sectors:
        return []
    xs = [sector.position.x for sector in sectors]
    ys = [sector.position.y for sector in sectors]
    min_x, min_y = min(xs), min(ys)
    grid = np.full((max(ys) - min_y + 1, max(xs) - min_x + 1), EMPTY_MARK, dtype="<U1")
    for sector in sectors:
        grid[sector.position.y - min_y, sector.position.x - min_x] = sector_mark(sector)
    return ["".join(row) for row in grid]


__all__ = ["format_level", "sector_mark"]
