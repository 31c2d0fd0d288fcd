from __future__ import annotations

import math

from pygame.math import Vector2


def vec_sum(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x + b.x, a.y + b.y)


def vec_diff(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x - b.x, a.y - b.y)


def scale(vector: Vector2, factor: float) -> Vector2:
    return Vector2(vector.x * factor, vector.y * factor)


def rotate(vector: Vector2, radians: float) -> Vector2:
    """Rotate counter-clockwise by ``radians``."""
    s = math.sin(radians)
    c = math.cos(radians)
    return Vector2(vector.x * c - vector.y * s, vector.x * s + vector.y * c)


def magnitude(vector: Vector2) -> float:
    return math.sqrt(vector.x * vector.x + vector.y * vector.y)


def normalize(vector: Vector2) -> Vector2:
    # pygame raises ValueError for a zero-length vector
    return Vector2(vector).normalize()


def safe_normalize(vector: Vector2) -> Vector2:
    return _safe_normalize_xy(vector.x, vector.y)


def _safe_normalize_xy(x: float, y: float) -> Vector2:
    magnitude_sq = x * x + y * y
    if magnitude_sq < 1e-10:
        return Vector2()
    inv = 1.0 / math.sqrt(magnitude_sq)
    return Vector2(x * inv, y * inv)


def perp(vector: Vector2) -> Vector2:
    return Vector2(-vector.y, vector.x)


def dot(a: Vector2, b: Vector2) -> float:
    return a.x * b.x + a.y * b.y


def cross(a: Vector2, b: Vector2) -> float:
    return a.x * b.y - a.y * b.x


def clamp_magnitude(vector: Vector2, max_length: float) -> Vector2:
    if max_length <= 0:
        return Vector2()
    magnitude_sq = vector.x * vector.x + vector.y * vector.y
    if magnitude_sq <= max_length * max_length:
        return Vector2(vector)
    inv = max_length / math.sqrt(magnitude_sq)
    return Vector2(vector.x * inv, vector.y * inv)


def clamp_value(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))
