"""SandCell — a single lattice unit of the sand grid.

A cell is either solid sand (blocking, diggable) or a cleared tunnel
(passable).  Cells are allocated once when the grid is built and are
only ever mutated in place by digging.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SandCell:
    """A single tile in the sand grid.

    Attributes:
        grid_x: Column index.
        grid_y: Row index.
        is_solid: True for sand, False for an excavated tunnel.
        last_modified: Grid revision at which this cell last changed
            (0 if it still holds its initial state).
    """

    grid_x: int
    grid_y: int
    is_solid: bool = True
    last_modified: int = 0
