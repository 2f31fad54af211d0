import pytest

from sector_structure.config import settings_from_config
from sector_structure.models import GenerationContext, Level, Position, World
from sector_structure.rng import random_value
from sector_structure.structure.central import (
    CrossingStreets,
    NestedRectangles,
    ParallelStreets,
    SideBySideRectangles,
    SimpleRectangle,
    central_position,
    central_seeds,
    choose_family,
    create_central_structure,
    create_plaza,
)
from sector_structure.world_grid import Direction

FAMILIES = {
    "parallels",
    "crossings",
    "plaza",
    "rectangles_side",
    "rectangles_nested",
    "rectangles_simple",
}


def _level(**kwargs) -> Level:
    kwargs.setdefault("level_center_position", Position(0, 0, 0))
    return Level(level=0, level_ordinal=1, **kwargs)


def test_central_seeds_use_level_and_camp_ordinal() -> None:
    level = _level(camp_ordinal=2, num_sectors=80)
    s1, s2, s3, sr = central_seeds(7, level)

    assert s1 == (7 % 4 + 1) * 11 + 9 * 666
    assert s2 == (7 % 6 + 1) * 9 + 7 * 331
    assert s3 == (7 % 3 + 1) * 5 + 11 * 561
    assert sr == 10000 + 7 + 2 * 22 + 80


def test_choose_family_follows_bands() -> None:
    for sr in range(40):
        roll = random_value(sr)
        family = choose_family(sr)
        assert family in FAMILIES
        if roll < 0.15:
            assert family == "parallels"
        elif roll >= 0.7:
            assert family == "rectangles_simple"


def test_central_position_moves_toward_far_level_center() -> None:
    assert central_position(_level()) == Position(0, 0, 0)
    far = _level(level_center_position=Position(0, 20, 0))
    assert central_position(far) == Position(0, 10, 0)


def test_simple_rectangle_shifts_with_offset() -> None:
    paths = SimpleRectangle(Position(0, 0, 0), 5, False).paths_at_offset(1, 0)

    assert len(paths) == 4
    assert paths[0].start_pos == Position(0, -1, -2)
    assert paths[0].direction is Direction.EAST
    assert paths[0].length == 5


def test_crossing_streets_are_centered() -> None:
    shape = CrossingStreets(Position(0, 0, 0), 1, 1, 7, 2, 7, 2)
    paths = shape.paths_at_offset(0, 0)

    assert [(path.start_pos, path.direction) for path in paths] == [
        (Position(0, -3, 0), Direction.EAST),
        (Position(0, 0, -3), Direction.SOUTH),
    ]


def test_parallel_streets_get_a_connector() -> None:
    shape = ParallelStreets(Position(0, 0, 0), 2, 10, Direction.EAST, 4, 0)
    paths = shape.paths_at_offset(0, 0)

    assert [path.start_pos for path in paths[:2]] == [Position(0, -5, -2), Position(0, -5, 2)]
    connector = paths[2]
    assert connector.start_pos == Position(0, 0, -2)
    assert connector.direction is Direction.SOUTH
    assert connector.length == 5


def test_nested_rectangles_spokes_bridge_the_rings() -> None:
    shape = NestedRectangles(Position(0, 0, 0), 3, 9, False, (Direction.EAST,))
    paths = shape.paths_at_offset(0, 0)

    assert len(paths) == 9
    spoke = paths[-1]
    assert spoke.start_pos == Position(0, 2, 0)
    assert spoke.length == pytest.approx(3)


def test_side_by_side_rectangles_add_connector_when_apart() -> None:
    connected = SideBySideRectangles(Position(0, 0, 0), 5, 2, True, True, 0)
    apart = SideBySideRectangles(Position(0, 0, 0), 5, 4, True, False, 0)

    assert len(connected.paths_at_offset(0, 0)) == 8
    paths = apart.paths_at_offset(0, 0)
    assert len(paths) == 9
    assert paths[-1].direction is Direction.EAST
    assert paths[-1].length == 4


def test_plaza_recenters_on_nearby_passage() -> None:
    level = _level(passage_down_position=Position(0, 3, 3))

    create_plaza(101, 202, level, Position(0, 0, 0), [Position(0, 3, 3)])

    assert level.sector_count == 12
    xs = sorted(sector.position.x for sector in level.sectors)
    assert 1 <= (xs[0] + xs[-1]) / 2 <= 5


def test_central_structure_is_deterministic() -> None:
    def build(seed: int) -> tuple[str, list]:
        level = _level(passage_up_position=Position(0, 2, -2))
        context = GenerationContext(seed, World([level]), settings_from_config())
        family = create_central_structure(context, level)
        return family, [(s.position.key, s.stage) for s in level.sectors]

    family, cells = build(5)

    assert family in FAMILIES
    assert cells
    assert build(5) == (family, cells)
