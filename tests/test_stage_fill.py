import pytest

from sector_structure.config import settings_from_config
from sector_structure.models import (
    GenerationContext,
    GenerationOptions,
    Level,
    Position,
    Sector,
    Stage,
    World,
)
from sector_structure.structure import stage_fill
from sector_structure.structure.sectors import create_sector
from sector_structure.structure.stage_fill import add_path_burst, add_rectangle_burst, fill_stage
from sector_structure.world_grid import Direction


def _context(level: Level, config: dict | None = None) -> GenerationContext:
    return GenerationContext(3, World([level]), settings_from_config(config))


def _level() -> Level:
    return Level(
        level=0,
        level_ordinal=2,
        level_center_position=Position(0, 0, 0),
        stage_sector_quotas={Stage.LATE: 10},
        stages=[Stage.LATE],
    )


def test_bursts_skip_empty_levels() -> None:
    level = _level()
    context = _context(level)
    options = GenerationOptions(stage=Stage.LATE)

    assert add_rectangle_burst(context, 1, level, options) == 0
    assert add_path_burst(context, 2, level, options) == 0
    assert level.sector_count == 0


def test_fill_stage_gives_up_on_empty_level() -> None:
    level = _level()
    context = _context(level, {"stage_fill": {"max_attempts": 20}})

    assert fill_stage(context, level, Stage.LATE) == 20
    assert level.sector_count == 0


def test_fill_stage_reaches_quota_without_touching_existing_sectors() -> None:
    level = _level()
    seed_sector = create_sector(level, Position(0, 0, 0)).sector
    context = _context(level)

    attempts = fill_stage(context, level, Stage.LATE)

    assert attempts < context.settings.stage_fill_max_attempts
    assert level.num_sectors_by_stage(Stage.LATE) > 10
    assert level.get_sector(0, 0) is seed_sector
    assert all(sector.stage is Stage.LATE for sector in level.sectors)


def test_fill_stage_is_deterministic() -> None:
    def build() -> list[tuple[int, int]]:
        level = _level()
        create_sector(level, Position(0, 0, 0))
        fill_stage(_context(level), level, Stage.LATE)
        return [sector.position.key for sector in level.sectors]

    assert build() == build()


def _record_bursts(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, bool]]:
    calls: list[tuple[str, bool]] = []

    def fake_rectangle_burst(context, attempt, level, options):
        calls.append(("rectangle", options.can_connect_to_different_stage))
        return 0

    def fake_path_burst(context, attempt, level, options):
        calls.append(("path", options.can_connect_to_different_stage))
        return 0

    monkeypatch.setattr(stage_fill, "add_rectangle_burst", fake_rectangle_burst)
    monkeypatch.setattr(stage_fill, "add_path_burst", fake_path_burst)
    return calls


def test_fill_stage_allows_cross_stage_starts_every_fifth_attempt_after_five(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls = _record_bursts(monkeypatch)
    level = _level()
    level.add_sector(Sector(Position(0, 0, 0), Stage.EARLY))
    context = _context(level, {"stage_fill": {"max_attempts": 10}})

    assert fill_stage(context, level, Stage.LATE) == 10

    assert [kind for kind, _ in calls] == ["rectangle", "path"] * 5
    # attempt 5 is not past five yet; attempt 10 is
    assert [cross for _, cross in calls] == [False] * 9 + [True]


def test_fill_stage_never_crosses_stages_for_early(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _record_bursts(monkeypatch)
    level = _level()
    level.add_sector(Sector(Position(0, 0, 0), Stage.EARLY))
    context = _context(level, {"stage_fill": {"max_attempts": 10}})

    assert fill_stage(context, level, Stage.EARLY) == 10

    assert len(calls) == 10
    assert not any(cross for _, cross in calls)


def test_rectangle_burst_stops_at_first_blocked_rectangle(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(
        stage_fill,
        "random_directions",
        lambda seed, count, diagonal: [Direction.EAST, Direction.SOUTH],
    )
    level = Level(
        level=0,
        level_ordinal=2,
        level_center_position=Position(0, 0, 0),
        stage_center_positions={Stage.EARLY: [Position(0, 2, 0)]},
    )
    level.add_sector(Sector(Position(0, 0, 0), Stage.LATE))
    context = _context(level)

    completed = add_rectangle_burst(context, 1, level, GenerationOptions(stage=Stage.LATE))

    # (1, 0) sits inside the early center's clearance, so the east rectangle fails
    assert completed == 0
    assert not level.has_sector(1, 0)
    assert not level.has_sector(0, 1)
    assert level.sector_count == 1
