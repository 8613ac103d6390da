"""Config — load simulation parameters from YAML files.

World size, grid resolution, population and per-ant behaviour
constants live in YAML and are parsed into typed dataclasses here.
Missing keys fall back to the dataclass defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from antfarm.colony.traits import Traits

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        world_width: Width of the world in world units.
        world_height: Height of the world in world units.
        cell_size: Side length of one sand cell in world units.
        ant_count: Number of ants spawned at start.
        spawn_depth: Depth of the surface band ants spawn in.
        ant: Behaviour parameters shared by every ant.
    """

    seed: int = 42
    world_width: float = 760.0
    world_height: float = 560.0
    cell_size: float = 4.0
    ant_count: int = 30
    spawn_depth: float = 20.0
    ant: Traits = field(default_factory=Traits)

    def __post_init__(self) -> None:
        """Reject configurations that cannot build a grid.

        Raises:
            ValueError: On a non-positive cell size or world dimension,
                or a negative ant count.
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
        if self.ant_count < 0:
            msg = f"ant_count must be non-negative, got {self.ant_count}"
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If the loaded values are invalid.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            world_width=data.get("world_width", cls.world_width),
            world_height=data.get("world_height", cls.world_height),
            cell_size=data.get("cell_size", cls.cell_size),
            ant_count=data.get("ant_count", cls.ant_count),
            spawn_depth=data.get("spawn_depth", cls.spawn_depth),
            ant=_traits_from_mapping(data.get("ant") or {}),
        )


def _traits_from_mapping(data: dict[str, Any]) -> Traits:
    """Build Traits from a YAML mapping, skipping unknown keys."""
    known = {f.name for f in fields(Traits)}
    overrides: dict[str, Any] = {}
    for name, value in data.items():
        if name not in known:
            logger.warning("Ignoring unknown ant trait %r in config", name)
            continue
        overrides[name] = value
    return Traits(**overrides)
