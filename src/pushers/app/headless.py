from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from ..config import ArenaConfig
from ..rng import DeterministicRng
from ..sim.core.controller import TeamController
from ..sim.types.metrics import TurnMetrics
from .protocol import TokenReader, format_commands, read_layout, read_turn

logger = logging.getLogger(__name__)

_HEADER = [
    "turn",
    "score_red",
    "score_blue",
    "candidates",
    "assignments",
    "timeouts",
    "losses",
    "working",
    "pushing",
    "turn_ms",
]


def _format_row(metrics: TurnMetrics, turn_ms: float) -> list[object]:
    return [
        metrics.turn,
        metrics.score_red,
        metrics.score_blue,
        metrics.candidates,
        metrics.assignments,
        metrics.timeouts,
        metrics.losses,
        metrics.working,
        metrics.pushing,
        f"{turn_ms:.3f}",
    ]


def run_headless(
    input_stream: TextIO,
    output_stream: TextIO,
    config: ArenaConfig | None = None,
    log_path: Optional[Path] = None,
    deterministic_log: bool = False,
) -> int:
    """Play one match over the text protocol and return the number of turns answered."""
    config = config if config is not None else ArenaConfig()
    reader = TokenReader(input_stream)
    layout = read_layout(reader)
    logger.info("map loaded: %d vertices, %d regions", len(layout.vertices), len(layout.regions))
    controller = TeamController(layout, config, DeterministicRng(config.seed))

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    turns = 0
    try:
        while True:
            snapshot = read_turn(reader)
            if snapshot is None:
                break
            commands = controller.decide(snapshot)
            output_stream.write(format_commands(commands) + "\n")
            output_stream.flush()
            turns += 1
            metrics = controller.metrics
            if writer and metrics is not None:
                turn_ms = 0.0 if deterministic_log else metrics.turn_duration_ms
                writer.writerow(_format_row(metrics, turn_ms))
    finally:
        if csv_file:
            csv_file.close()

    logger.info("match finished after %d turns", turns)
    return turns


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless pusher team controller (reads turns on stdin)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML file overriding arena settings")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-turn metrics")
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (turn_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level for stderr diagnostics")
    args = parser.parse_args()

    logging.basicConfig(
        stream=sys.stderr,
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ArenaConfig.from_yaml(args.config) if args.config else ArenaConfig()
    if args.seed is not None:
        config.seed = args.seed
    run_headless(sys.stdin, sys.stdout, config, args.log, deterministic_log=args.deterministic_log)


if __name__ == "__main__":
    main()
