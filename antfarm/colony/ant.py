"""Ant -- an individual digging agent.

Each Ant wanders through the sand, digging as it goes.  Decisions are
made on a fixed logical tick while the visible position is smoothed
toward the current target on every frame.

Key behaviour model:

- **Heading walk**: most of the time the ant perturbs its heading by up
  to +/-90 degrees; with probability ``downward_bias`` it instead picks a
  fresh heading in the half-turn arc centred on straight down.
- **Tunnel seeking**: older and deeper ants increasingly prefer to turn
  toward the nearest already-excavated cell, which joins separate
  burrows into a connected network.
- **Dig ahead + corridor**: every logical tick the cell one step ahead
  is cleared, and every successful move clears a 3x3 corridor between
  the old and new positions.
- **Stuck recovery**: an ant whose target stays solid for more than
  ``max_stuck_time`` updates picks a completely new heading.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from antfarm.colony.traits import Traits

if TYPE_CHECKING:
    from numpy.random import Generator

    from antfarm.world.grid import SandGrid

# -- Constants ---------------------------------------------------------------

_REFERENCE_FRAME = 16.0  # elapsed time at which one smoothing step applies
_HALF_TURN = math.pi
_FULL_TURN = 2.0 * math.pi
_DOWN = math.pi / 2.0  # y grows downward


@dataclass
class Ant:
    """A single digging ant.

    Attributes:
        ant_id: Stable identifier for display collaborators.
        x: Current X position in world units.
        y: Current Y position in world units (grows downward).
        heading: Movement direction in radians (0 = east, pi/2 = down).
        rng: This ant's own random generator.
        traits: Shared behaviour parameters.
        target_x: X of the point the ant is moving toward.
        target_y: Y of the point the ant is moving toward.
        previous_x: Interpolation anchor X, captured each logical tick.
        previous_y: Interpolation anchor Y, captured each logical tick.
        last_x: Position X before the most recent move.
        last_y: Position Y before the most recent move.
        age: Logical ticks lived (boosted ticks count extra).
        stuck_counter: Consecutive updates blocked by solid sand.
        is_boosted: Whether the global speed boost is active.
        movement_speed: Reported speed; scaled by the boost.
        update_accumulator: Time gathered toward the next logical tick.
    """

    ant_id: int
    x: float
    y: float
    heading: float
    rng: Generator = field(repr=False)
    traits: Traits = field(default_factory=Traits, repr=False)
    target_x: float = field(init=False)
    target_y: float = field(init=False)
    previous_x: float = field(init=False)
    previous_y: float = field(init=False)
    last_x: float = field(init=False)
    last_y: float = field(init=False)
    age: int = 0
    stuck_counter: int = 0
    is_boosted: bool = False
    movement_speed: float = field(init=False)
    update_accumulator: float = 0.0

    def __post_init__(self) -> None:
        """Anchor target and history at the spawn position."""
        self.target_x, self.target_y = self.x, self.y
        self.previous_x, self.previous_y = self.x, self.y
        self.last_x, self.last_y = self.x, self.y
        self.movement_speed = self.traits.base_movement_speed

    @classmethod
    def spawn(
        cls,
        ant_id: int,
        x: float,
        y: float,
        rng: Generator,
        traits: Traits | None = None,
    ) -> Ant:
        """Create an ant at ``(x, y)`` with a uniformly random heading.

        Args:
            ant_id: Identifier to assign.
            x: Spawn X in world units.
            y: Spawn Y in world units.
            rng: Generator the ant will own for its whole life.
            traits: Behaviour parameters (defaults if omitted).

        Returns:
            A new Ant facing a random direction.
        """
        heading = float(rng.uniform(0.0, _FULL_TURN))
        return cls(
            ant_id=ant_id,
            x=x,
            y=y,
            heading=heading,
            rng=rng,
            traits=traits if traits is not None else Traits(),
        )

    def set_boost(self, boosted: bool) -> None:
        """Toggle the speed boost.

        The boost speeds up aging and tunnel-preference growth.  The
        reported ``movement_speed`` scales too, but step distances do not.
        """
        self.is_boosted = boosted
        speed = self.traits.base_movement_speed
        self.movement_speed = speed * self.traits.boost_multiplier if boosted else speed

    def update(self, grid: SandGrid, elapsed: float) -> bool:
        """Advance the ant by one frame.

        Runs a logical tick first if enough time has accumulated, then
        moves toward the target (or registers being stuck) and clamps
        to the world bounds.

        Args:
            grid: The sand grid to read and dig.
            elapsed: Time since the previous frame.

        Returns:
            True if a logical tick fired during this frame.
        """
        self.update_accumulator += elapsed
        ticked = self.update_accumulator >= self.traits.update_interval
        if ticked:
            self.update_accumulator = 0.0
            self._think(grid)

        self.last_x, self.last_y = self.x, self.y

        target = grid.cell_at_point(self.target_x, self.target_y)
        if target is None or not target.is_solid:
            self._move(grid, elapsed)
        else:
            self.stuck_counter += 1
            if self.stuck_counter > self.traits.max_stuck_time:
                self.heading = float(self.rng.uniform(0.0, _FULL_TURN))
                self.stuck_counter = 0

        self._clamp(grid.world_width, grid.world_height)
        return ticked

    def tunnel_preference(self) -> float:
        """Return the current probability of seeking an existing tunnel.

        Two independently capped terms are summed: one grows with age
        (faster while boosted), the other with depth below
        ``min_depth_for_preference``.  The sum is capped again.
        """
        t = self.traits
        growth = t.tunnel_preference_growth
        if self.is_boosted:
            growth *= t.boost_multiplier
        age_term = min(t.age_preference_cap, self.age * growth)

        depth_term = 0.0
        if self.y > t.min_depth_for_preference:
            depth_term = min(
                t.depth_preference_cap,
                (self.y - t.min_depth_for_preference) * t.depth_preference_growth,
            )

        return min(t.max_tunnel_preference, age_term + depth_term)

    def search_radius(self) -> float:
        """Return the tunnel-seek scan radius, which widens with depth."""
        t = self.traits
        return t.base_search_radius * max(1.0, self.y / t.search_depth_scale)

    def find_nearest_tunnel(self, grid: SandGrid) -> tuple[float, float] | None:
        """Scan the square around the ant for the closest cleared cell.

        Sample points sit on a lattice of spacing ``search_step`` spanning
        ``[-radius, radius]`` on both axes.  The scan runs row by row
        (dy outer, dx inner) and only replaces the best candidate on a
        strictly shorter distance, so ties go to the smallest dy, then
        the smallest dx.

        Returns:
            The world point of the nearest cleared sample, or None.
        """
        radius = self.search_radius()
        step = self.traits.search_step
        samples = int(2.0 * radius / step) + 1

        best_point: tuple[float, float] | None = None
        best_distance = math.inf
        for j in range(samples):
            dy = -radius + j * step
            for i in range(samples):
                dx = -radius + i * step
                cell = grid.cell_at_point(self.x + dx, self.y + dy)
                if cell is None or cell.is_solid:
                    continue
                distance = math.hypot(dx, dy)
                if distance < best_distance:
                    best_distance = distance
                    best_point = (self.x + dx, self.y + dy)
        return best_point

    # -- Private behaviour methods --

    def _think(self, grid: SandGrid) -> None:
        """One logical tick: age, choose a heading, dig ahead, retarget."""
        t = self.traits
        self.age += t.boost_multiplier if self.is_boosted else 1
        self.previous_x, self.previous_y = self.x, self.y

        nearest = None
        if float(self.rng.random()) < self.tunnel_preference():
            nearest = self.find_nearest_tunnel(grid)

        if nearest is not None:
            self.heading = math.atan2(nearest[1] - self.y, nearest[0] - self.x)
        else:
            self._wander()

        ahead_x = self.x + math.cos(self.heading) * t.dig_distance
        ahead_y = self.y + math.sin(self.heading) * t.dig_distance
        if grid.dig_at_point(ahead_x, ahead_y):
            self.stuck_counter = 0

        self.target_x = self.x + math.cos(self.heading) * t.move_distance
        self.target_y = self.y + math.sin(self.heading) * t.move_distance

    def _wander(self) -> None:
        """Pick a heading without tunnel guidance.

        With probability ``downward_bias`` choose anywhere in the
        half-turn centred on straight down; otherwise turn by up to a
        quarter-turn either way.
        """
        if float(self.rng.random()) < self.traits.downward_bias:
            self.heading = _DOWN + (float(self.rng.random()) - 0.5) * _HALF_TURN
        else:
            self.heading += (float(self.rng.random()) - 0.5) * _HALF_TURN

    def _move(self, grid: SandGrid, elapsed: float) -> None:
        """Interpolate from the anchor toward the target and dig behind."""
        t = self.traits
        lerp = t.movement_smoothing * (elapsed / _REFERENCE_FRAME)
        self.x = self.previous_x + (self.target_x - self.previous_x) * lerp
        self.y = self.previous_y + (self.target_y - self.previous_y) * lerp
        self.stuck_counter = 0
        grid.dig_line(
            self.last_x,
            self.last_y,
            self.x,
            self.y,
            spacing=t.dig_line_spacing,
            brush_radius=t.brush_radius,
        )

    def _clamp(self, world_width: float, world_height: float) -> None:
        """Keep position and target inside ``[0, width] x [0, height]``."""
        self.x = min(max(self.x, 0.0), world_width)
        self.y = min(max(self.y, 0.0), world_height)
        self.target_x = min(max(self.target_x, 0.0), world_width)
        self.target_y = min(max(self.target_y, 0.0), world_height)
