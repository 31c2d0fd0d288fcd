from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TurnMetrics:
    turn: int
    score_red: int
    score_blue: int
    candidates: int
    assignments: int
    timeouts: int
    losses: int
    working: int
    pushing: int
    turn_duration_ms: float = 0.0
