from sector_structure.models import Level, Position, Sector, Stage, World
from sector_structure.pathfinding import find_shortest_path, is_reachable, path_length


def _world_with(cells: list[tuple[int, int]]) -> tuple[World, Level]:
    level = Level(level=0, level_ordinal=1, level_center_position=Position(0, 0, 0))
    for x, y in cells:
        level.add_sector(Sector(Position(0, x, y), Stage.EARLY))
    return World([level]), level


def test_shortest_path_uses_diagonals_by_default() -> None:
    world, _ = _world_with([(0, 0), (1, 1), (2, 2)])

    path = find_shortest_path(world, Position(0, 0, 0), Position(0, 2, 2))

    assert path == [Position(0, 1, 1), Position(0, 2, 2)]
    assert path_length(world, Position(0, 0, 0), Position(0, 2, 2), allow_diagonal=False) == -1


def test_shortest_path_same_cell_is_empty() -> None:
    world, _ = _world_with([(0, 0)])
    assert find_shortest_path(world, Position(0, 0, 0), Position(0, 0, 0)) == []


def test_missing_sector_is_unreachable() -> None:
    world, _ = _world_with([(0, 0), (1, 0)])
    assert find_shortest_path(world, Position(0, 0, 0), Position(0, 5, 5)) is None
    assert not is_reachable(world, Position(0, 0, 0), Position(0, 5, 5))


def test_cache_needs_reset_after_growth() -> None:
    world, level = _world_with([(0, 0), (1, 0), (3, 0)])
    start, end = Position(0, 0, 0), Position(0, 3, 0)
    assert path_length(world, start, end) == -1

    level.add_sector(Sector(Position(0, 2, 0), Stage.EARLY))
    assert path_length(world, start, end) == -1

    world.reset_paths()
    assert path_length(world, start, end) == 3
