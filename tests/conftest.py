"""Shared fixtures for the ant farm test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from antfarm.colony.colony import Colony
from antfarm.colony.traits import Traits
from antfarm.world.grid import SandGrid


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_grid() -> SandGrid:
    """A 40x40-cell grid over a 160x160 world (cell size 4)."""
    return SandGrid(world_width=160, world_height=160, cell_size=4)


@pytest.fixture
def straight_down_traits() -> Traits:
    """Traits that never tunnel-seek and always pick a downward heading."""
    return Traits(max_tunnel_preference=0.0, downward_bias=1.0)


@pytest.fixture
def default_colony(rng: Generator) -> Colony:
    """A colony pre-populated with 5 ants in a 160-wide world."""
    colony = Colony()
    for _ in range(5):
        colony.spawn_ant(rng, world_width=160, spawn_depth=20)
    return colony
