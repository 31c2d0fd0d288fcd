from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Sequence, Tuple

from pygame.math import Vector2


class GameColor(IntEnum):
    RED = 0
    BLUE = 1
    GREY = 2


class SnapshotError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class Vertex:
    x: int
    y: int
    z: int = 0

    @property
    def position(self) -> Vector2:
        return Vector2(self.x, self.y)


@dataclass(frozen=True, slots=True)
class Region:
    vertices: Tuple[int, ...]


@dataclass(frozen=True, slots=True)
class MapLayout:
    vertices: Tuple[Vertex, ...]
    regions: Tuple[Region, ...]

    @staticmethod
    def build(vertices: Sequence[Vertex], regions: Sequence[Sequence[int]]) -> "MapLayout":
        count = len(vertices)
        built: List[Region] = []
        for region_index, outline in enumerate(regions):
            for vertex_index in outline:
                if not 0 <= vertex_index < count:
                    raise SnapshotError(
                        f"region {region_index} references vertex {vertex_index}, map has {count} vertices"
                    )
            built.append(Region(tuple(outline)))
        return MapLayout(tuple(vertices), tuple(built))


@dataclass(slots=True)
class Kinematics:
    position: Vector2
    velocity: Vector2


@dataclass(slots=True)
class Marker:
    position: Vector2
    velocity: Vector2
    color: GameColor


@dataclass(slots=True)
class TurnSnapshot:
    turn: int
    scores: Tuple[int, int]
    region_colors: List[GameColor]
    agents: List[Kinematics]
    markers: List[Marker]

    def validate(self, layout: MapLayout, pcount: int) -> None:
        if len(self.region_colors) != len(layout.regions):
            raise SnapshotError(
                f"turn {self.turn}: {len(self.region_colors)} region colors for {len(layout.regions)} regions"
            )
        if len(self.agents) < pcount:
            raise SnapshotError(f"turn {self.turn}: expected at least {pcount} agents, got {len(self.agents)}")
        if len(self.markers) < pcount:
            raise SnapshotError(f"turn {self.turn}: expected at least {pcount} markers, got {len(self.markers)}")
