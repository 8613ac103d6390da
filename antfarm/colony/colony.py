"""Colony — the ordered population of digging ants.

A Colony owns its Ant agents and the Traits they share.  It spawns new
ants near the surface, broadcasts the speed boost, and updates every
ant once per frame.  Ants never sense each other, so update order only
matters for display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from antfarm.colony.ant import Ant
from antfarm.colony.traits import Traits

if TYPE_CHECKING:
    from numpy.random import Generator

    from antfarm.world.grid import SandGrid


@dataclass
class Colony:
    """Top-level state for the ant population.

    Attributes:
        traits: Behaviour parameters shared by every ant.
        ants: Living ants in spawn order.
        boosted: Whether the speed boost is currently broadcast.
    """

    traits: Traits = field(default_factory=Traits)
    ants: list[Ant] = field(default_factory=list)
    boosted: bool = False

    def spawn_ant(
        self,
        rng: Generator,
        world_width: float,
        spawn_depth: float,
    ) -> Ant:
        """Create a new ant at a random position near the top of the world.

        The spawn column is drawn from ``[0, world_width)`` and the row
        from ``[0, spawn_depth)``, both as whole world units.  The ant
        gets its own generator seeded from ``rng``.

        Args:
            rng: Master seeded random generator.
            world_width: Width of the world in world units.
            spawn_depth: Depth of the band ants may spawn in.

        Returns:
            The newly created Ant (also appended to ``self.ants``).
        """
        x = float(rng.integers(0, max(1, int(world_width))))
        y = float(rng.integers(0, max(1, int(spawn_depth))))
        ant_rng = np.random.default_rng(int(rng.integers(0, 2**32)))
        ant = Ant.spawn(
            ant_id=len(self.ants),
            x=x,
            y=y,
            rng=ant_rng,
            traits=self.traits,
        )
        ant.set_boost(self.boosted)
        self.ants.append(ant)
        return ant

    def set_boost(self, enabled: bool) -> None:
        """Broadcast the speed-boost flag to every ant."""
        self.boosted = enabled
        for ant in self.ants:
            ant.set_boost(enabled)

    def update(self, grid: SandGrid, elapsed: float) -> int:
        """Update every ant for one frame.

        Args:
            grid: The shared sand grid.
            elapsed: Time since the previous frame.

        Returns:
            Number of ants whose logical tick fired this frame.
        """
        ticked = 0
        for ant in self.ants:
            if ant.update(grid, elapsed):
                ticked += 1
        return ticked
