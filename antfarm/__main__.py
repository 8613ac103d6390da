"""Entry point for ``python -m antfarm``.

Loads the default YAML config (if present), builds a simulation engine,
and runs it headless for a fixed number of frames, logging a summary of
the excavated tunnel network.
"""

from __future__ import annotations

import argparse
import logging
import pathlib
from dataclasses import replace

from antfarm.simulation.config import SimulationConfig
from antfarm.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, create engine, run frames, log a summary."""
    parser = argparse.ArgumentParser(
        prog="antfarm",
        description="Ant farm - headless tunnel-digging simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=None,
        help="Path to YAML config file (default: config/default.yaml if present)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=600,
        help="Number of frames to simulate (default: 600)",
    )
    parser.add_argument(
        "--frame-ms",
        type=float,
        default=16.0,
        help="Elapsed time per frame in milliseconds (default: 16)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the config RNG seed",
    )
    parser.add_argument(
        "--boost",
        action="store_true",
        help="Run with the speed boost held down",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = args.config
    if config_path is None and _DEFAULT_CONFIG.exists():
        config_path = _DEFAULT_CONFIG
    config = (
        SimulationConfig.from_yaml(config_path)
        if config_path is not None
        else SimulationConfig()
    )
    if args.seed is not None:
        config = replace(config, seed=args.seed)

    engine = SimulationEngine(config=config)
    engine.set_boost(args.boost)
    engine.run(args.frames, frame_ms=args.frame_ms)

    states = engine.ant_states()
    mean_depth = sum(s.y for s in states) / len(states) if states else 0.0
    logger.info(
        "Simulated %d frames (%.0f ms): %d ants, %.1f%% of sand excavated, "
        "mean depth %.1f",
        engine.frame,
        engine.elapsed,
        len(states),
        engine.cleared_fraction() * 100.0,
        mean_depth,
    )


if __name__ == "__main__":
    main()
