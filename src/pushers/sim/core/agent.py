from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AgentState(str, Enum):
    IDLE = "Idle"
    WORKING = "Working"


@dataclass(slots=True)
class Pusher:
    """Control state for one of our pushers; kinematics arrive with each snapshot."""

    id: int
    state: AgentState = AgentState.IDLE
    job_time: int = 0
    target_vertex: Optional[int] = None

    @property
    def busy(self) -> bool:
        return self.state is AgentState.WORKING

    def assign(self, vertex: int) -> None:
        self.state = AgentState.WORKING
        self.target_vertex = vertex
        self.job_time = 0

    def release(self) -> None:
        self.state = AgentState.IDLE
        self.target_vertex = None
