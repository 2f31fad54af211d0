from dataclasses import dataclass

from sector_structure.models import PathDescriptor, Position
from sector_structure.structure.offsets import count_poi_hits, find_best_offset
from sector_structure.world_grid import Direction


@dataclass(frozen=True)
class _Street:
    length: int = 3

    def paths_at_offset(self, dx: int, dy: int) -> list[PathDescriptor]:
        return [PathDescriptor(Position(0, dx, dy), Direction.EAST, self.length)]


def test_count_poi_hits_counts_pairs() -> None:
    paths = _Street().paths_at_offset(0, 0)

    assert count_poi_hits([Position(0, 1, 0), Position(0, 2, 0)], paths) == 2
    assert count_poi_hits([Position(0, 3, 0)], paths) == 0


def test_best_offset_is_first_strict_maximum() -> None:
    assert find_best_offset(2, [Position(0, 2, 2)], _Street()) == (0, 2)


def test_best_offset_defaults_to_origin() -> None:
    assert find_best_offset(3, [], _Street()) == (0, 0)
    assert find_best_offset(1, [Position(0, 10, 10)], _Street()) == (0, 0)
