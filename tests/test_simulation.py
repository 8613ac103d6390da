"""Tests for antfarm.simulation — engine and config loading."""

import logging
import math
from pathlib import Path

import numpy as np
import pytest

from antfarm.colony.ant import Ant
from antfarm.colony.traits import Traits
from antfarm.simulation.config import SimulationConfig
from antfarm.simulation.engine import AntState, SimulationEngine
from antfarm.world.grid import SandGrid


def _small_config(**overrides: object) -> SimulationConfig:
    values: dict[str, object] = {
        "seed": 777,
        "world_width": 160,
        "world_height": 160,
        "cell_size": 4,
        "ant_count": 5,
    }
    values.update(overrides)
    return SimulationConfig(**values)  # type: ignore[arg-type]


def _surface_ant(ant_id: int) -> Ant:
    return Ant(
        ant_id=ant_id,
        x=80.0,
        y=10.0,
        heading=0.0,
        rng=np.random.default_rng(3),
    )


class TestSimulationConfig:
    """Tests for YAML config loading."""

    def test_defaults(self) -> None:
        cfg = SimulationConfig()
        assert cfg.seed == 42
        assert cfg.world_width == 760
        assert cfg.world_height == 560
        assert cfg.cell_size == 4
        assert cfg.ant_count == 30
        assert cfg.ant == Traits()

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text(
            "seed: 99\nworld_width: 160\nant_count: 3\n"
            "ant:\n  downward_bias: 0.9\n  max_stuck_time: 4\n",
        )
        cfg = SimulationConfig.from_yaml(yaml_file)
        assert cfg.seed == 99
        assert cfg.world_width == 160
        assert cfg.world_height == 560
        assert cfg.ant_count == 3
        assert cfg.ant.downward_bias == 0.9
        assert cfg.ant.max_stuck_time == 4
        assert cfg.ant.update_interval == 16.0

    def test_from_empty_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert SimulationConfig.from_yaml(yaml_file) == SimulationConfig()

    def test_unknown_trait_warns(
        self,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("ant:\n  wingspan: 3\n")
        with caplog.at_level(logging.WARNING):
            cfg = SimulationConfig.from_yaml(yaml_file)
        assert cfg.ant == Traits()
        assert "wingspan" in caplog.text

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            SimulationConfig.from_yaml(tmp_path / "nope.yaml")

    def test_rejects_zero_cell_size(self) -> None:
        with pytest.raises(ValueError, match="cell_size"):
            SimulationConfig(cell_size=0)

    def test_rejects_negative_ant_count(self) -> None:
        with pytest.raises(ValueError, match="ant_count"):
            SimulationConfig(ant_count=-1)

    @pytest.mark.parametrize("name", ["search_step", "dig_line_spacing"])
    def test_rejects_zero_spacing_in_yaml(self, tmp_path: Path, name: str) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text(f"ant:\n  {name}: 0\n")
        with pytest.raises(ValueError, match=name):
            SimulationConfig.from_yaml(yaml_file)

    def test_shipped_default_config_loads(self) -> None:
        path = Path(__file__).resolve().parent.parent / "config" / "default.yaml"
        assert SimulationConfig.from_yaml(path) == SimulationConfig()


class TestSimulationEngine:
    """Tests for the frame loop."""

    def test_engine_initialises(self) -> None:
        engine = SimulationEngine(config=_small_config())
        assert engine.frame == 0
        assert engine.grid.width == 40
        assert engine.grid.height == 40
        assert len(engine.colony.ants) == 5
        assert engine.cleared_fraction() == 0.0

    def test_initialize_from_dimensions(self) -> None:
        engine = SimulationEngine.initialize(160, 160, 4, 7, seed=1)
        assert len(engine.ant_states()) == 7
        assert engine.grid.cell_size == 4

    def test_initialize_rejects_bad_cell_size(self) -> None:
        with pytest.raises(ValueError):
            SimulationEngine.initialize(160, 160, 0, 7)

    def test_ants_spawn_near_top(self) -> None:
        engine = SimulationEngine(config=_small_config(ant_count=20))
        for state in engine.ant_states():
            assert 0.0 <= state.x < 160.0
            assert 0.0 <= state.y < 20.0

    def test_advance_counts_frames(self) -> None:
        engine = SimulationEngine(config=_small_config())
        engine.advance(16.0)
        engine.advance(8.0)
        assert engine.frame == 2
        assert engine.elapsed == 24.0

    def test_advance_rejects_negative(self) -> None:
        engine = SimulationEngine(config=_small_config())
        with pytest.raises(ValueError):
            engine.advance(-1.0)

    def test_run_digs_tunnels(self) -> None:
        engine = SimulationEngine(config=_small_config())
        engine.run(frames=50)
        assert engine.frame == 50
        assert engine.cleared_fraction() > 0.0
        assert not engine.solidity().all()

    def test_set_boost_broadcasts(self) -> None:
        engine = SimulationEngine(config=_small_config())
        engine.set_boost(True)
        assert engine.boosted
        assert all(a.is_boosted for a in engine.colony.ants)
        engine.set_boost(False)
        assert not any(a.is_boosted for a in engine.colony.ants)

    def test_ant_states_are_snapshots(self) -> None:
        engine = SimulationEngine(config=_small_config())
        states = engine.ant_states()
        assert [s.ant_id for s in states] == [0, 1, 2, 3, 4]
        assert isinstance(states[0], AntState)
        with pytest.raises(AttributeError):
            states[0].x = 1.0  # type: ignore[misc]

    def test_cells_cover_grid(self) -> None:
        engine = SimulationEngine(config=_small_config())
        coords = {(c.grid_x, c.grid_y) for c in engine.cells()}
        assert len(coords) == 40 * 40

    def test_positions_clamped(self) -> None:
        engine = SimulationEngine(config=_small_config(ant_count=10))
        engine.set_boost(True)
        frame_rng = np.random.default_rng(5)
        for _ in range(300):
            engine.advance(float(frame_rng.uniform(0.0, 40.0)))
            for state in engine.ant_states():
                assert 0.0 <= state.x <= 160.0
                assert 0.0 <= state.y <= 160.0

    def test_determinism(self) -> None:
        """Same seed must produce identical state after N frames."""
        engine_a = SimulationEngine(config=_small_config())
        engine_b = SimulationEngine(config=_small_config())
        engine_a.run(frames=100)
        engine_b.run(frames=100)

        assert engine_a.ant_states() == engine_b.ant_states()
        assert np.array_equal(engine_a.solidity(), engine_b.solidity())


class TestBoost:
    """Boosted ants age faster, all else equal."""

    def test_boost_ages_fifty_times_faster(self) -> None:
        ticks = 25
        plain = _surface_ant(0)
        boosted = _surface_ant(1)
        boosted.set_boost(True)
        grid_a = SandGrid(world_width=160, world_height=160, cell_size=4)
        grid_b = SandGrid(world_width=160, world_height=160, cell_size=4)

        for _ in range(ticks):
            plain.update(grid_a, 16.0)
            boosted.update(grid_b, 16.0)

        assert plain.age == ticks
        assert boosted.age == 50 * ticks

    def test_boost_does_not_change_step_size(self) -> None:
        plain = _surface_ant(0)
        boosted = _surface_ant(1)
        boosted.set_boost(True)
        grid_a = SandGrid(world_width=160, world_height=160, cell_size=4)
        grid_b = SandGrid(world_width=160, world_height=160, cell_size=4)

        plain.update(grid_a, 16.0)
        boosted.update(grid_b, 16.0)

        assert boosted.x == pytest.approx(plain.x)
        assert boosted.y == pytest.approx(plain.y)


class TestEndToEnd:
    """A single ant digging straight down from the surface."""

    def test_digs_downward_column(self, straight_down_traits: Traits) -> None:
        grid = SandGrid(world_width=160, world_height=160, cell_size=4)
        ant = Ant(
            ant_id=0,
            x=80.0,
            y=0.0,
            heading=math.pi / 2,
            rng=np.random.default_rng(2024),
            traits=straight_down_traits,
        )

        depths = [ant.y]
        for _ in range(10):
            assert ant.update(grid, 16.0) is True
            depths.append(ant.y)

        assert ant.age == 10
        assert all(b > a for a, b in zip(depths, depths[1:]))
        last_row = math.floor(ant.y / grid.cell_size)
        for gy in range(last_row + 1):
            assert not grid.cell_at_index(20, gy).is_solid

    def test_engine_drives_single_ant(self, straight_down_traits: Traits) -> None:
        engine = SimulationEngine(
            config=_small_config(ant_count=1, ant=straight_down_traits),
        )
        start = engine.ant_states()[0]
        engine.run(frames=10, frame_ms=16.0)
        end = engine.ant_states()[0]
        assert end.y > start.y
        assert engine.cleared_fraction() > 0.0
