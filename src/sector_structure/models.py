"""Dataclasses that model worlds, levels and their sector graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .rng import js_round

if TYPE_CHECKING:  # pragma: no cover - typing-only imports
    from typing_extensions import Self

    from .config import GeneratorSettings
    from .world_grid import Direction


class Stage(Enum):
    """Coarse region labels of a level, earliest first."""

    EARLY = "e"
    LATE = "l"

    @classmethod
    def earliest(cls) -> Stage:
        return next(iter(cls))


class CriticalPathType(str, Enum):
    CAMP_TO_CAMP = "camp_pos_to_camp_pos"
    CAMP_TO_POI_1 = "camp_to_poi_1"
    CAMP_TO_POI_2 = "camp_to_poi_2"
    CAMP_TO_PASSAGE = "camp_to_passage"
    PASSAGE_TO_CAMP = "passage_to_camp"
    PASSAGE_TO_PASSAGE = "passage_to_passage"


@dataclass(frozen=True, order=True)
class Position:
    """Integer grid cell on one level."""

    level: int
    x: int
    y: int

    @classmethod
    def normalized(cls, level: int, x: float, y: float) -> Self:
        return cls(level, js_round(x), js_round(y))

    @property
    def key(self) -> tuple[int, int]:
        return (self.x, self.y)

    def offset(self, dx: float, dy: float) -> Position:
        return Position.normalized(self.level, self.x + dx, self.y + dy)

    def on_level(self, level: int) -> Position:
        if level == self.level:
            return self
        return Position(level, self.x, self.y)

    def __str__(self) -> str:
        return f"{self.x}.{self.y} ({self.level})"


class Sector:
    """One grid cell of a level's layout graph.

    Position and stage are fixed at creation; critical-path tags only
    accumulate.
    """

    def __init__(
        self,
        position: Position,
        stage: Stage,
        *,
        is_campable: bool = True,
        not_campable_reason: str | None = None,
    ) -> None:
        self._position = position
        self._stage = stage
        self.is_campable = is_campable
        self.not_campable_reason = not_campable_reason
        self.is_camp = False
        self.is_passage_up = False
        self.is_passage_down = False
        self.is_fill = False
        self._critical_paths: set[CriticalPathType] = set()

    @property
    def position(self) -> Position:
        return self._position

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def critical_paths(self) -> frozenset[CriticalPathType]:
        return frozenset(self._critical_paths)

    def add_to_critical_path(self, path_type: CriticalPathType) -> None:
        self._critical_paths.add(path_type)

    def is_on_critical_path(self, path_type: CriticalPathType | None = None) -> bool:
        if path_type is None:
            return bool(self._critical_paths)
        return path_type in self._critical_paths

    def __repr__(self) -> str:
        return f"Sector({self._position}, stage={self._stage.name})"


@dataclass
class Level:
    """One floor of the world with its anchors and sector graph."""

    level: int
    level_ordinal: int
    level_center_position: Position
    camp_ordinal: int = 0
    stage_center_positions: dict[Stage, list[Position]] = field(default_factory=dict)
    camp_positions: list[Position] = field(default_factory=list)
    passage_up_position: Position | None = None
    passage_down_position: Position | None = None
    num_sectors: int = 100
    max_sectors: int = 150
    stage_sector_quotas: dict[Stage, int] = field(default_factory=dict)
    stages: list[Stage] = field(default_factory=lambda: list(Stage))
    is_campable: bool = True
    not_campable_reason: str | None = None
    _sectors: dict[tuple[int, int], Sector] = field(
        default_factory=dict, init=False, repr=False
    )

    @property
    def sectors(self) -> list[Sector]:
        return list(self._sectors.values())

    @property
    def sector_count(self) -> int:
        return len(self._sectors)

    def has_sector(self, x: int, y: int) -> bool:
        return (x, y) in self._sectors

    def get_sector(self, x: int, y: int) -> Sector | None:
        return self._sectors.get((x, y))

    def add_sector(self, sector: Sector) -> bool:
        key = sector.position.key
        if key in self._sectors:
            return False
        self._sectors[key] = sector
        return True

    def sectors_by_stage(self, stage: Stage) -> list[Sector]:
        return [sector for sector in self._sectors.values() if sector.stage is stage]

    def num_sectors_by_stage(self, stage: Stage) -> int:
        return sum(1 for sector in self._sectors.values() if sector.stage is stage)

    def get_neighbours(self, x: int, y: int) -> dict[Direction, Sector]:
        from .world_grid import ALL_DIRECTIONS, direction_vector

        neighbours: dict[Direction, Sector] = {}
        for direction in ALL_DIRECTIONS:
            dx, dy = direction_vector(direction)
            sector = self._sectors.get((x + dx, y + dy))
            if sector is not None:
                neighbours[direction] = sector
        return neighbours

    def is_camp_position(self, position: Position) -> bool:
        return any(camp.key == position.key for camp in self.camp_positions)

    def is_passage_up_position(self, position: Position) -> bool:
        return (
            self.passage_up_position is not None
            and self.passage_up_position.key == position.key
        )

    def is_passage_down_position(self, position: Position) -> bool:
        return (
            self.passage_down_position is not None
            and self.passage_down_position.key == position.key
        )


@dataclass
class World:
    """Levels ordered top to bottom plus the shared shortest-path cache."""

    levels: list[Level]
    features: list[Any] = field(default_factory=list)
    path_cache: dict[tuple, Any] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.levels = sorted(self.levels, key=lambda lvl: lvl.level, reverse=True)

    @property
    def top_level(self) -> int:
        return self.levels[0].level

    @property
    def bottom_level(self) -> int:
        return self.levels[-1].level

    def get_level(self, level: int) -> Level | None:
        for candidate in self.levels:
            if candidate.level == level:
                return candidate
        return None

    def get_stages(self, level: Level) -> list[Stage]:
        return [stage for stage in Stage if stage in level.stages]

    def reset_paths(self) -> None:
        self.path_cache.clear()


@dataclass(frozen=True)
class PathDescriptor:
    """A straight run of cells that has not been carved yet."""

    start_pos: Position
    direction: Direction
    length: float
    completed: bool = True


@dataclass(frozen=True)
class RequiredPath:
    start: Position
    end: Position
    max_length: int
    critical_path_type: CriticalPathType
    stage: Stage | None


@dataclass(frozen=True)
class GenerationOptions:
    stage: Stage | None = None
    critical_path_type: CriticalPathType | None = None
    can_connect_to_different_stage: bool = False


DEFAULT_OPTIONS = GenerationOptions()


@dataclass
class GenerationContext:
    """State scoped to a single prepare_structure call."""

    seed: int
    world: World
    settings: GeneratorSettings

    @property
    def features(self) -> list[Any]:
        return self.world.features


__all__ = [
    "CriticalPathType",
    "DEFAULT_OPTIONS",
    "GenerationContext",
    "GenerationOptions",
    "Level",
    "PathDescriptor",
    "Position",
    "RequiredPath",
    "Sector",
    "Stage",
    "World",
]
