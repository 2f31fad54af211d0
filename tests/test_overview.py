from sector_structure.models import Level, Position, Sector, Stage
from sector_structure.overview import format_level


def test_format_level_marks_sectors() -> None:
    level = Level(level=0, level_ordinal=1, level_center_position=Position(0, 0, 0))
    level.add_sector(Sector(Position(0, 0, 0), Stage.EARLY))
    level.add_sector(Sector(Position(0, 2, 0), Stage.LATE))
    camp = Sector(Position(0, 0, 1), Stage.EARLY)
    camp.is_camp = True
    fill = Sector(Position(0, 1, 1), Stage.LATE)
    fill.is_fill = True
    down = Sector(Position(0, 2, 2), Stage.LATE)
    down.is_passage_down = True
    for sector in (camp, fill, down):
        level.add_sector(sector)

    assert format_level(level) == ["e.l", "C+.", "..D"]


def test_format_empty_level() -> None:
    level = Level(level=0, level_ordinal=1, level_center_position=Position(0, 0, 0))
    assert format_level(level) == []
