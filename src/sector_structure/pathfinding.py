"""Breadth-first shortest paths over a level's sector graph.

Search trees are cached on the world per (level, start, diagonal mode);
callers must call ``World.reset_paths()`` after adding sectors.
"""

from __future__ import annotations

from collections import deque

from .models import Level, Position, World
from .world_grid import ALL_DIRECTIONS, ORTHOGONAL_DIRECTIONS, direction_vector

ParentMap = dict[tuple[int, int], "tuple[int, int] | None"]


def _search(level: Level, start: tuple[int, int], allow_diagonal: bool) -> ParentMap:
    directions = ALL_DIRECTIONS if allow_diagonal else ORTHOGONAL_DIRECTIONS
    steps = [direction_vector(direction) for direction in directions]
    parents: ParentMap = {start: None}
    queue: deque[tuple[int, int]] = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in steps:
            neighbour = (x + dx, y + dy)
            if neighbour in parents or not level.has_sector(*neighbour):
                continue
            parents[neighbour] = (x, y)
            queue.append(neighbour)
    return parents


def _parents_from(
    world: World, level: Level, start: tuple[int, int], allow_diagonal: bool, use_cache: bool
) -> ParentMap:
    cache_key = ("bfs", level.level, start, allow_diagonal)
    if use_cache:
        cached = world.path_cache.get(cache_key)
        if cached is not None:
            return cached
    parents = _search(level, start, allow_diagonal)
    if use_cache:
        world.path_cache[cache_key] = parents
    return parents


def find_shortest_path(
    world: World,
    start: Position,
    end: Position,
    allow_diagonal: bool = True,
    use_cache: bool = True,
) -> list[Position] | None:
    """Return the cells after ``start`` up to and including ``end``.

    Returns ``None`` when either endpoint has no sector or no route exists,
    and an empty list when ``start == end``.
    """
    if start.level != end.level:
        return None
    level = world.get_level(start.level)
    if level is None:
        return None
    if not level.has_sector(*start.key) or not level.has_sector(*end.key):
        return None
    parents = _parents_from(world, level, start.key, allow_diagonal, use_cache)
    if end.key not in parents:
        return None
    path: list[Position] = []
    current: tuple[int, int] | None = end.key
    while current is not None and current != start.key:
        path.append(Position(start.level, current[0], current[1]))
        current = parents[current]
    path.reverse()
    return path


def path_length(
    world: World,
    start: Position,
    end: Position,
    allow_diagonal: bool = True,
    use_cache: bool = True,
) -> int:
    """Number of steps between two sectors, or -1 when unreachable."""
    path = find_shortest_path(world, start, end, allow_diagonal, use_cache)
    return -1 if path is None else len(path)


def is_reachable(world: World, start: Position, end: Position, allow_diagonal: bool = True) -> bool:
    return find_shortest_path(world, start, end, allow_diagonal) is not None


__all__ = ["find_shortest_path", "is_reachable", "path_length"]
