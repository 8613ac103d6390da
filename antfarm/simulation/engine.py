"""SimulationEngine — the per-frame entry point.

Owns the sand grid and the colony and advances them by wall-clock
deltas supplied by whatever loop drives the simulation (a real-time
display, a test harness stepping fixed frames, or the headless runner).
The engine itself has no timer and no thread.

Each call to ``advance`` updates every ant in spawn order.  Ants only
interact through the shared grid.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray

from antfarm.colony.colony import Colony
from antfarm.simulation.config import SimulationConfig
from antfarm.world.cell import SandCell
from antfarm.world.grid import SandGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AntState:
    """Read-only snapshot of one ant for display collaborators."""

    ant_id: int
    x: float
    y: float
    heading: float


@dataclass
class SimulationEngine:
    """Drives the simulation forward frame by frame.

    Attributes:
        config: Loaded simulation configuration.
        grid: The sand grid.
        colony: The ant population.
        rng: Master seeded random generator (spawning only).
        frame: Number of frames advanced so far.
        elapsed: Total time advanced so far.
    """

    config: SimulationConfig
    grid: SandGrid = field(init=False)
    colony: Colony = field(init=False)
    rng: Generator = field(init=False, repr=False)
    frame: int = 0
    elapsed: float = 0.0

    def __post_init__(self) -> None:
        """Build the grid, the RNG, and spawn the initial ants."""
        self.rng = np.random.default_rng(self.config.seed)
        self.grid = SandGrid(
            world_width=self.config.world_width,
            world_height=self.config.world_height,
            cell_size=self.config.cell_size,
        )
        self.colony = Colony(traits=self.config.ant)
        for _ in range(self.config.ant_count):
            self.colony.spawn_ant(
                self.rng,
                world_width=self.config.world_width,
                spawn_depth=self.config.spawn_depth,
            )
        logger.debug(
            "Built %dx%d grid (cell size %s) with %d ants",
            self.grid.width,
            self.grid.height,
            self.config.cell_size,
            len(self.colony.ants),
        )

    @classmethod
    def initialize(
        cls,
        world_width: float,
        world_height: float,
        cell_size: float,
        agent_count: int,
        *,
        seed: int = 42,
    ) -> SimulationEngine:
        """Build an engine from bare dimensions with default ant traits.

        Raises:
            ValueError: If the dimensions cannot form a grid.
        """
        config = SimulationConfig(
            seed=seed,
            world_width=world_width,
            world_height=world_height,
            cell_size=cell_size,
            ant_count=agent_count,
        )
        return cls(config=config)

    @property
    def boosted(self) -> bool:
        """Return True while the speed boost is active."""
        return self.colony.boosted

    def advance(self, elapsed_ms: float) -> None:
        """Advance every ant by one frame of ``elapsed_ms``.

        Args:
            elapsed_ms: Time since the previous frame.

        Raises:
            ValueError: If ``elapsed_ms`` is negative.
        """
        if elapsed_ms < 0:
            msg = f"elapsed_ms must be non-negative, got {elapsed_ms}"
            raise ValueError(msg)
        self.colony.update(self.grid, elapsed_ms)
        self.frame += 1
        self.elapsed += elapsed_ms

    def run(self, frames: int, frame_ms: float = 16.0) -> None:
        """Advance a fixed number of equal-length frames.

        Args:
            frames: Number of frames to advance.
            frame_ms: Duration of each frame.
        """
        for _ in range(frames):
            self.advance(frame_ms)

    def set_boost(self, enabled: bool) -> None:
        """Turn the global speed boost on or off."""
        if enabled != self.colony.boosted:
            logger.info("Speed boost %s", "on" if enabled else "off")
        self.colony.set_boost(enabled)

    def ant_states(self) -> list[AntState]:
        """Return a snapshot of every ant's identity, position and heading."""
        return [
            AntState(ant_id=ant.ant_id, x=ant.x, y=ant.y, heading=ant.heading)
            for ant in self.colony.ants
        ]

    def cells(self) -> Iterator[SandCell]:
        """Yield every sand cell in row-major order."""
        return self.grid.iter_cells()

    def solidity(self) -> NDArray[np.bool_]:
        """Return a ``(height, width)`` snapshot of cell solidity."""
        return self.grid.solidity()

    def cleared_fraction(self) -> float:
        """Return the fraction of the grid that has been excavated."""
        return self.grid.cleared_fraction()
