"""SandGrid — the lattice of sand cells the ants excavate.

The grid partitions a continuous world rectangle into square cells of
``cell_size`` world units.  It is the only place sand state lives: every
solidity check and every dig goes through it.  Lookups outside the grid
return ``None``, which callers treat as passable.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from antfarm.world.cell import SandCell


@dataclass
class SandGrid:
    """A 2D grid of sand cells covering the world rectangle.

    Attributes:
        world_width: Width of the continuous world in world units.
        world_height: Height of the continuous world in world units.
        cell_size: Side length of one cell in world units.
        width: Number of cell columns.
        height: Number of cell rows.
        revision: Counter bumped on every cell that actually changes.
        cells: 2D list of SandCell objects indexed as ``cells[y][x]``.
    """

    world_width: float
    world_height: float
    cell_size: float
    width: int = field(init=False)
    height: int = field(init=False)
    revision: int = field(init=False, default=0)
    cells: list[list[SandCell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate dimensions and fill every cell with solid sand.

        Raises:
            ValueError: If the cell size or a world dimension is not
                strictly positive.
        """
        if self.cell_size <= 0:
            msg = f"cell_size must be positive, got {self.cell_size}"
            raise ValueError(msg)
        if self.world_width <= 0 or self.world_height <= 0:
            msg = (
                f"world size must be positive, got "
                f"{self.world_width}x{self.world_height}"
            )
            raise ValueError(msg)

        self.width = int(self.world_width // self.cell_size)
        self.height = int(self.world_height // self.cell_size)
        self.cells = [
            [SandCell(grid_x=x, grid_y=y) for x in range(self.width)]
            for y in range(self.height)
        ]

    def cell_at_index(self, gx: int, gy: int) -> SandCell | None:
        """Return the cell at grid index ``(gx, gy)``, or None if out of range."""
        if not (0 <= gx < self.width and 0 <= gy < self.height):
            return None
        return self.cells[gy][gx]

    def cell_at_point(self, x: float, y: float) -> SandCell | None:
        """Return the cell containing world point ``(x, y)``.

        Coordinates are floored, so small negative values map to column
        or row -1 and yield None instead of wrapping to cell 0.
        """
        gx = math.floor(x / self.cell_size)
        gy = math.floor(y / self.cell_size)
        return self.cell_at_index(gx, gy)

    def set_solid(self, gx: int, gy: int, value: bool) -> bool:
        """Set the solidity of the cell at ``(gx, gy)``.

        Args:
            gx: Column index.
            gy: Row index.
            value: True to fill with sand, False to clear.

        Returns:
            True if the cell existed and its state changed.
        """
        cell = self.cell_at_index(gx, gy)
        if cell is None or cell.is_solid == value:
            return False
        self.revision += 1
        cell.is_solid = value
        cell.last_modified = self.revision
        return True

    def dig_at_point(self, x: float, y: float) -> bool:
        """Clear the cell containing ``(x, y)`` if it is solid sand.

        Returns:
            True if a solid cell was cleared.
        """
        cell = self.cell_at_point(x, y)
        if cell is None or not cell.is_solid:
            return False
        return self.set_solid(cell.grid_x, cell.grid_y, False)

    def dig_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        spacing: float = 2.0,
        brush_radius: int = 1,
    ) -> int:
        """Carve a tunnel corridor along the segment ``(x1, y1) -> (x2, y2)``.

        The segment is split into ``max(1, int(length / spacing))``
        intervals.  At each of the resulting sample points (both ends
        included) a square brush of ``2 * brush_radius + 1`` cells,
        centred on the cell containing the point, is cleared.

        Args:
            x1: Start X in world units.
            y1: Start Y in world units.
            x2: End X in world units.
            y2: End Y in world units.
            spacing: World distance between samples along the segment.
            brush_radius: Brush half-width in cells (1 gives a 3x3 brush).

        Returns:
            Number of cells that were cleared by this call.
        """
        dx = x2 - x1
        dy = y2 - y1
        distance = math.hypot(dx, dy)
        steps = max(1, int(distance / spacing))

        cleared = 0
        for i in range(steps + 1):
            t = i / steps
            gx = math.floor((x1 + dx * t) / self.cell_size)
            gy = math.floor((y1 + dy * t) / self.cell_size)
            for oy in range(-brush_radius, brush_radius + 1):
                for ox in range(-brush_radius, brush_radius + 1):
                    if self.set_solid(gx + ox, gy + oy, False):
                        cleared += 1
        return cleared

    def iter_cells(self) -> Iterator[SandCell]:
        """Yield every cell in row-major order."""
        for row in self.cells:
            yield from row

    def solidity(self) -> NDArray[np.bool_]:
        """Return a ``(height, width)`` snapshot of cell solidity."""
        return np.array(
            [[cell.is_solid for cell in row] for row in self.cells],
            dtype=np.bool_,
        ).reshape(self.height, self.width)

    def cleared_fraction(self) -> float:
        """Return the fraction of cells that have been excavated."""
        total = self.width * self.height
        if total == 0:
            return 0.0
        return float(np.count_nonzero(~self.solidity())) / total
