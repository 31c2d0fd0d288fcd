from __future__ import annotations

import random

import pytest
from pytest import approx

from pushers.app.protocol import format_commands
from pushers.config import ArenaConfig
from pushers.rng import DeterministicRng
from pushers.sim.core.agent import AgentState
from pushers.sim.core.controller import TeamController
from pushers.sim.types.snapshot import GameColor, MapLayout, SnapshotError, Vertex

RED = GameColor.RED
BLUE = GameColor.BLUE


@pytest.fixture
def push_layout() -> MapLayout:
    # vertex 0 at (10, 0) is the only vertex shared by the red and the blue region
    vertices = [Vertex(10, 0), Vertex(20, -10), Vertex(20, 10), Vertex(30, 30), Vertex(40, 30)]
    return MapLayout.build(vertices, [[0, 1, 2], [0, 3, 4]])


def _controller(layout: MapLayout, pcount: int = 1, seed: int = 5) -> TeamController:
    config = ArenaConfig(pcount=pcount, seed=seed)
    return TeamController(layout, config, DeterministicRng(seed))


def test_pusher_behind_marker_pushes_immediately(push_layout, snapshot_factory):
    controller = _controller(push_layout)
    snapshot = snapshot_factory(0, [RED, BLUE], [((0.0, 0.0), (0.0, 0.0))], [((5.0, 0.0), RED)])

    commands = controller.decide(snapshot)

    pusher = controller.pushers[0]
    assert pusher.state is AgentState.WORKING
    assert pusher.target_vertex == 0
    assert commands[0].x == approx(2.0)
    assert commands[0].y == approx(0.0)
    assert controller.metrics.pushing == 1
    assert controller.metrics.assignments == 1


def test_empty_pool_leaves_pusher_idle(square_layout, snapshot_factory):
    controller = _controller(square_layout)
    snapshot = snapshot_factory(0, [RED, RED], [((0.0, 0.0), (0.0, 0.0))], [((5.0, 5.0), RED)])

    commands = controller.decide(snapshot)

    assert controller.pushers[0].state is AgentState.IDLE
    assert format_commands(commands) == "0.0 0.0"
    assert controller.metrics.candidates == 0


def test_no_vertex_is_assigned_twice_in_one_turn(square_layout, snapshot_factory):
    for seed in range(20):
        controller = _controller(square_layout, pcount=3, seed=seed)
        snapshot = snapshot_factory(
            0,
            [RED, BLUE],
            [((2.0, 2.0), (0.0, 0.0)), ((8.0, 2.0), (0.0, 0.0)), ((15.0, 5.0), (0.0, 0.0))],
            [((3.0, 5.0), RED), ((6.0, 5.0), RED), ((15.0, 8.0), RED)],
        )

        controller.decide(snapshot)

        targets = [p.target_vertex for p in controller.pushers if p.busy]
        assert sorted(targets) == [1, 4]
        assert not controller.pushers[2].busy


def test_job_times_out_exactly_at_limit(push_layout, snapshot_factory):
    controller = _controller(push_layout)
    working = snapshot_factory(0, [RED, BLUE], [((0.0, 5.0), (0.0, 0.0))], [((5.0, 0.0), RED)])
    controller.decide(working)
    pusher = controller.pushers[0]
    assert pusher.job_time == 0

    for turn in range(1, 60):
        working.turn = turn
        controller.decide(working)
        assert pusher.busy
        assert pusher.job_time == turn

    # no candidates left, so the timed out pusher stays idle
    drained = snapshot_factory(60, [RED, RED], [((0.0, 5.0), (0.0, 0.0))], [((5.0, 0.0), RED)])
    commands = controller.decide(drained)
    assert not pusher.busy
    assert controller.metrics.timeouts == 1
    assert format_commands(commands) == "0.0 0.0"


def test_timed_out_pusher_is_reassigned_the_same_turn(push_layout, snapshot_factory):
    controller = _controller(push_layout, seed=11)
    snapshot = snapshot_factory(0, [RED, BLUE], [((0.0, 5.0), (0.0, 0.0))], [((5.0, 0.0), RED)])
    for turn in range(61):
        snapshot.turn = turn
        controller.decide(snapshot)

    assert controller.metrics.timeouts == 1
    assert controller.metrics.assignments == 1
    assert controller.pushers[0].job_time == 0


def test_losing_marker_color_drops_the_job(push_layout, snapshot_factory):
    controller = _controller(push_layout)
    controller.decide(snapshot_factory(0, [RED, BLUE], [((0.0, 5.0), (0.0, 0.0))], [((5.0, 0.0), RED)]))
    assert controller.pushers[0].busy

    commands = controller.decide(
        snapshot_factory(1, [RED, BLUE], [((0.0, 5.0), (1.0, 0.0))], [((5.0, 0.0), BLUE)])
    )

    assert not controller.pushers[0].busy
    assert controller.metrics.losses == 1
    assert format_commands(commands) == "0.0 0.0"


def test_marker_on_destination_settles(push_layout, snapshot_factory):
    controller = _controller(push_layout)
    snapshot = snapshot_factory(0, [RED, BLUE], [((7.0, 3.0), (0.0, 0.0))], [((10.0, 0.0), RED)])

    commands = controller.decide(snapshot)

    assert controller.pushers[0].busy
    assert commands[0].length() == approx(0.0, abs=1e-12)


def test_commands_follow_pusher_index_order_and_ignore_opponents(square_layout, snapshot_factory):
    controller = _controller(square_layout, pcount=2)
    snapshot = snapshot_factory(
        0,
        [RED, BLUE],
        [
            ((0.0, 0.0), (0.0, 0.0)),
            ((1.0, 1.0), (0.0, 0.0)),
            ((50.0, 50.0), (3.0, 3.0)),
            ((60.0, 60.0), (3.0, 3.0)),
        ],
        [((5.0, 5.0), BLUE), ((3.0, 3.0), RED), ((40.0, 40.0), RED)],
    )

    commands = controller.decide(snapshot)

    assert len(commands) == 2
    assert (commands[0].x, commands[0].y) == (0.0, 0.0)
    assert controller.pushers[1].busy


def test_commands_stay_within_acceleration_limit(square_layout, snapshot_factory):
    rng = random.Random(99)
    controller = _controller(square_layout, pcount=3, seed=3)
    for turn in range(200):
        snapshot = snapshot_factory(
            turn,
            [rng.choice(list(GameColor)) for _ in range(2)],
            [
                ((rng.uniform(0, 100), rng.uniform(0, 100)), (rng.uniform(-6, 6), rng.uniform(-6, 6)))
                for _ in range(6)
            ],
            [((rng.uniform(0, 100), rng.uniform(0, 100)), rng.choice([RED, RED, BLUE])) for _ in range(6)],
        )
        for command in controller.decide(snapshot):
            assert command.length() <= 2.0 + 1e-9
        for pusher, marker in zip(controller.pushers, snapshot.markers):
            if marker.color != RED:
                assert not pusher.busy


def test_same_seed_reproduces_assignments(square_layout, snapshot_factory):
    def targets(seed: int) -> list:
        controller = _controller(square_layout, pcount=1, seed=seed)
        picked = []
        for turn in range(30):
            color = RED if turn % 2 == 0 else BLUE
            controller.decide(snapshot_factory(turn, [RED, BLUE], [((0.0, 0.0), (0.0, 0.0))], [((5.0, 5.0), color)]))
            picked.append(controller.pushers[0].target_vertex)
        return picked

    assert targets(8) == targets(8)


def test_reset_returns_pushers_to_idle(push_layout, snapshot_factory):
    controller = _controller(push_layout)
    controller.decide(snapshot_factory(0, [RED, BLUE], [((0.0, 0.0), (0.0, 0.0))], [((5.0, 0.0), RED)]))
    controller.reset()

    assert all(not pusher.busy for pusher in controller.pushers)
    assert controller.metrics is None


def test_short_snapshot_is_rejected(square_layout, snapshot_factory):
    controller = _controller(square_layout, pcount=2)
    snapshot = snapshot_factory(0, [RED, BLUE], [((0.0, 0.0), (0.0, 0.0))] * 2, [((5.0, 5.0), RED)])

    with pytest.raises(SnapshotError):
        controller.decide(snapshot)
