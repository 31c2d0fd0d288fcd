from __future__ import annotations

import logging
from time import perf_counter
from typing import List

from pygame.math import Vector2

from ...config import ArenaConfig
from ...rng import DeterministicRng
from ..systems import assignment, metrics as metrics_system, steering
from ..types.metrics import TurnMetrics
from ..types.snapshot import GameColor, Kinematics, MapLayout, Marker, TurnSnapshot
from .agent import Pusher

logger = logging.getLogger(__name__)


class TeamController:
    """Per-turn decision loop for our pushers.

    Pusher ``i`` always works with marker ``i``. Each turn the candidate pool
    is rebuilt from the region colors and consumed in pusher index order, so
    two pushers never receive the same vertex in one turn.
    """

    def __init__(self, layout: MapLayout, config: ArenaConfig, rng: DeterministicRng | None = None):
        self._layout = layout
        self._config = config
        self._rng = rng if rng is not None else DeterministicRng(config.seed)
        self._pushers: List[Pusher] = [Pusher(id=index) for index in range(config.pcount)]
        self._metrics: TurnMetrics | None = None

    @property
    def pushers(self) -> List[Pusher]:
        return self._pushers

    @property
    def metrics(self) -> TurnMetrics | None:
        return self._metrics

    def reset(self) -> None:
        self._rng.reset()
        for pusher in self._pushers:
            pusher.release()
            pusher.job_time = 0
        self._metrics = None

    def decide(self, snapshot: TurnSnapshot) -> List[Vector2]:
        start = perf_counter()
        snapshot.validate(self._layout, self._config.pcount)

        candidates = assignment.candidate_vertices(self._layout, snapshot.region_colors)
        available = len(candidates)
        assignments = timeouts = losses = pushing = 0
        commands: List[Vector2] = []

        for pusher in self._pushers:
            body = snapshot.agents[pusher.id]
            marker = snapshot.markers[pusher.id]

            if pusher.busy:
                pusher.job_time += 1
                if pusher.job_time >= self._config.jobs.job_timeout:
                    logger.debug("turn %d: pusher %d timed out on vertex %s", snapshot.turn, pusher.id, pusher.target_vertex)
                    pusher.release()
                    timeouts += 1

            if marker.color != GameColor.RED and pusher.busy:
                logger.debug("turn %d: pusher %d lost its marker", snapshot.turn, pusher.id)
                pusher.release()
                losses += 1

            if marker.color == GameColor.RED and not pusher.busy:
                vertex = self._rng.take_choice(candidates)
                if vertex is not None:
                    pusher.assign(vertex)
                    assignments += 1
                    logger.debug("turn %d: pusher %d assigned vertex %d", snapshot.turn, pusher.id, vertex)

            if pusher.busy:
                command, pushed = self._steer(pusher, body, marker)
                pushing += int(pushed)
            else:
                command = Vector2()
            commands.append(command)

        working = sum(1 for pusher in self._pushers if pusher.busy)
        duration_ms = (perf_counter() - start) * 1000.0
        self._metrics = metrics_system.create_metrics(
            snapshot.turn,
            snapshot.scores,
            available,
            duration_ms,
            (assignments, timeouts, losses, working, pushing),
        )
        return commands

    def _steer(self, pusher: Pusher, body: Kinematics, marker: Marker) -> tuple[Vector2, bool]:
        config = self._config
        tuning = config.steering
        destination = self._layout.vertices[pusher.target_vertex].position

        command, behind = steering.move_around(
            body.position,
            marker.position,
            marker.velocity,
            destination,
            config.accel_limit,
            agent_vel=body.velocity,
            behind_threshold=tuning.behind_threshold,
            waypoint_radius=tuning.waypoint_radius,
            max_sweep=tuning.max_sweep,
            frame_epsilon=tuning.frame_epsilon,
            deadband=tuning.axis_deadband,
        )
        if not behind:
            return command, False

        target = steering.push_point(marker.position, destination, body.position)
        command = steering.move_to(
            body.position,
            body.velocity,
            target,
            config.accel_limit,
            frame_epsilon=tuning.frame_epsilon,
            deadband=tuning.axis_deadband,
        )
        return command, True
