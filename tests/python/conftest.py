import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

ROOT = Path(__file__).resolve().parents[2]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from pygame.math import Vector2  # noqa: E402

from pushers.sim.types.snapshot import GameColor, Kinematics, MapLayout, Marker, TurnSnapshot, Vertex  # noqa: E402


@pytest.fixture
def square_layout() -> MapLayout:
    """Two unit squares sharing the edge 1-4 on a 10-unit grid.

    0---1---2
    |   |   |
    3---4---5
    """
    vertices = [
        Vertex(0, 10, 0),
        Vertex(10, 10, 0),
        Vertex(20, 10, 0),
        Vertex(0, 0, 0),
        Vertex(10, 0, 0),
        Vertex(20, 0, 0),
    ]
    regions = [[0, 1, 4, 3], [1, 2, 5, 4]]
    return MapLayout.build(vertices, regions)


def make_snapshot(
    turn: int,
    region_colors: list[GameColor],
    agents: list[tuple[tuple[float, float], tuple[float, float]]],
    markers: list[tuple[tuple[float, float], GameColor]],
) -> TurnSnapshot:
    return TurnSnapshot(
        turn=turn,
        scores=(0, 0),
        region_colors=list(region_colors),
        agents=[Kinematics(position=Vector2(pos), velocity=Vector2(vel)) for pos, vel in agents],
        markers=[Marker(position=Vector2(pos), velocity=Vector2(), color=color) for pos, color in markers],
    )


@pytest.fixture
def snapshot_factory():
    return make_snapshot
