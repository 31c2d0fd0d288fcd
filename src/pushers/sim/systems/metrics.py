from __future__ import annotations

from typing import Tuple

from ..types.metrics import TurnMetrics


def create_metrics(
    turn: int,
    scores: Tuple[int, int],
    candidates: int,
    duration_ms: float,
    counts: Tuple[int, int, int, int, int],
) -> TurnMetrics:
    assignments, timeouts, losses, working, pushing = counts
    score_red, score_blue = scores
    return TurnMetrics(
        turn=turn,
        score_red=score_red,
        score_blue=score_blue,
        candidates=candidates,
        assignments=assignments,
        timeouts=timeouts,
        losses=losses,
        working=working,
        pushing=pushing,
        turn_duration_ms=duration_ms,
    )
