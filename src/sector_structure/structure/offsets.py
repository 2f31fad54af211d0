"""Align parametrized shapes with points of interest by brute-force offset search."""

from __future__ import annotations

from typing import Protocol, Sequence

from ..models import PathDescriptor, Position
from ..world_grid import is_on_path, offsets_in_area


class ShapeGenerator(Protocol):
    def paths_at_offset(self, dx: int, dy: int) -> list[PathDescriptor]: ...


def count_poi_hits(pois: Sequence[Position], paths: Sequence[PathDescriptor]) -> int:
    """Count (poi, path) pairs where the poi lies on the path."""
    hits = 0
    for poi in pois:
        for path in paths:
            if is_on_path(poi, path.start_pos, path.direction, path.length):
                hits += 1
    return hits


def find_best_offset(
    max_offset: int, pois: Sequence[Position], shape: ShapeGenerator
) -> tuple[int, int]:
    best = (0, 0)
    best_hits = 0
    if not pois:
        return best
    for dx, dy in offsets_in_area(max_offset):
        hits = count_poi_hits(pois, shape.paths_at_offset(dx, dy))
        if hits > best_hits:
            best = (dx, dy)
            best_hits = hits
    return best


__all__ = ["ShapeGenerator", "count_poi_hits", "find_best_offset"]
