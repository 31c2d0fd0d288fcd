from __future__ import annotations

import math
from typing import Tuple

from pygame.math import Vector2

from ..utils.math2d import (
    clamp_magnitude,
    clamp_value,
    cross,
    dot,
    perp,
    rotate,
    safe_normalize,
    scale,
    vec_diff,
    vec_sum,
)

AXIS_DEADBAND = 0.01
FRAME_EPSILON = 1e-4
BEHIND_THRESHOLD = -0.8
WAYPOINT_RADIUS = 4.0
MAX_SWEEP = math.pi * 0.25


def solve_axis(
    pos: float,
    vel: float,
    target: float,
    accel_limit: float,
    deadband: float = AXIS_DEADBAND,
) -> float:
    """Bounded 1-D acceleration that brings a point mass to rest on ``target``.

    The step count is the fewest whole ticks that cover the remaining distance
    under a triangular velocity profile with ``accel_limit`` per tick; the
    returned value steers the current velocity toward the ideal velocity for
    that profile.
    """
    dist = target - pos
    if abs(dist) < deadband:
        return clamp_value(-vel, -accel_limit, accel_limit)

    steps = math.ceil((-1.0 + math.sqrt(1.0 + 8.0 * abs(dist) / accel_limit)) / 2.0)
    if steps < 1:
        steps = 1

    ideal_accel = 2.0 * dist / ((steps + 1) * steps)
    ideal_vel = ideal_accel * steps
    return clamp_value(ideal_vel - vel, -accel_limit, accel_limit)


def move_to(
    agent_pos: Vector2,
    agent_vel: Vector2,
    target: Vector2,
    accel_limit: float,
    frame_epsilon: float = FRAME_EPSILON,
    deadband: float = AXIS_DEADBAND,
) -> Vector2:
    offset = vec_diff(target, agent_pos)
    dist = math.hypot(offset.x, offset.y)
    if dist < frame_epsilon:
        a1 = Vector2(1.0, 0.0)
        a2 = Vector2(0.0, 1.0)
    else:
        a1 = scale(offset, 1.0 / dist)
        a2 = perp(a1)

    v1 = dot(a1, agent_vel)
    v2 = dot(a2, agent_vel)

    # lateral drift is cancelled outright, the rest of the budget goes along a1
    f1 = 0.0
    f2 = -v2
    if abs(f2) < accel_limit:
        remaining = math.sqrt(accel_limit * accel_limit - v2 * v2)
        f1 = solve_axis(-dist, v1, 0.0, remaining, deadband)

    force = vec_sum(scale(a1, f1), scale(a2, f2))
    return clamp_magnitude(force, accel_limit)


def move_around(
    agent_pos: Vector2,
    marker_pos: Vector2,
    marker_vel: Vector2,
    destination: Vector2,
    accel_limit: float,
    *,
    agent_vel: Vector2 | None = None,
    behind_threshold: float = BEHIND_THRESHOLD,
    waypoint_radius: float = WAYPOINT_RADIUS,
    max_sweep: float = MAX_SWEEP,
    frame_epsilon: float = FRAME_EPSILON,
    deadband: float = AXIS_DEADBAND,
) -> Tuple[Vector2, bool]:
    """Steer the pusher to the side of the marker opposite ``destination``.

    Returns ``(command, arrived_behind)``. When ``arrived_behind`` is true the
    command is zero and the caller is expected to push.
    """
    m_to_t = safe_normalize(vec_diff(destination, marker_pos))
    if m_to_t.x == 0.0 and m_to_t.y == 0.0:
        # marker already sits on its destination
        return Vector2(), True
    m_to_p = safe_normalize(vec_diff(agent_pos, marker_pos))

    alignment = dot(m_to_t, m_to_p)
    if alignment < behind_threshold:
        return Vector2(), True

    # sweep a bounded arc per turn so the pusher does not clip the marker
    move_angle = min(math.acos(clamp_value(alignment, -1.0, 1.0)), max_sweep)
    if cross(m_to_t, m_to_p) > 0:
        waypoint = vec_sum(marker_pos, scale(rotate(m_to_p, move_angle), waypoint_radius))
    else:
        waypoint = vec_sum(marker_pos, scale(rotate(m_to_p, -move_angle), waypoint_radius))

    velocity = Vector2() if agent_vel is None else agent_vel
    return move_to(agent_pos, velocity, waypoint, accel_limit, frame_epsilon, deadband), False


def push_point(marker_pos: Vector2, destination: Vector2, agent_pos: Vector2) -> Vector2:
    direction = safe_normalize(vec_diff(destination, marker_pos))
    if direction.x == 0.0 and direction.y == 0.0:
        return Vector2(agent_pos)
    return vec_diff(marker_pos, direction)
