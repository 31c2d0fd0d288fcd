from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class SteeringConfig:
    axis_deadband: float = 0.01
    frame_epsilon: float = 1e-4
    # dot(marker->dest, marker->pusher) below this means the pusher is behind the marker
    behind_threshold: float = -0.8
    waypoint_radius: float = 4.0
    max_sweep: float = math.pi * 0.25


@dataclass
class JobConfig:
    job_timeout: int = 60


@dataclass
class ArenaConfig:
    pcount: int = 3
    accel_limit: float = 2.0
    seed: Optional[int] = None
    steering: SteeringConfig = field(default_factory=SteeringConfig)
    jobs: JobConfig = field(default_factory=JobConfig)

    def __post_init__(self) -> None:
        if self.pcount <= 0:
            raise ValueError(f"pcount must be positive, got {self.pcount}")
        if self.accel_limit <= 0:
            raise ValueError(f"accel_limit must be positive, got {self.accel_limit}")
        if self.jobs.job_timeout <= 0:
            raise ValueError(f"job_timeout must be positive, got {self.jobs.job_timeout}")

    @staticmethod
    def from_yaml(path: Path) -> "ArenaConfig":
        data = yaml.safe_load(Path(path).read_text())
        return load_config(data or {})


def load_config(raw: dict) -> ArenaConfig:
    steering = SteeringConfig(**raw.get("steering", {}))
    jobs = JobConfig(**raw.get("jobs", {}))
    arena_values = {k: v for k, v in raw.items() if k not in {"steering", "jobs"}}
    return ArenaConfig(steering=steering, jobs=jobs, **arena_values)
