"""Tests for simulation parameters, runs and experiments."""

from __future__ import annotations

import json

import numpy as np
import pytest
from omegaconf import OmegaConf

from lightsim.simulation import (
    ExperimentRunner,
    InvalidParametersError,
    SimulationParameters,
    SimulationRun,
    run_simulation,
)


class TestSimulationParameters:
    """Tests for parameter validation."""

    def test_defaults(self):
        """Test default values."""
        params = SimulationParameters()

        assert params.duration == 600
        assert params.tick_interval == 10
        assert params.n_ticks == 60
        assert params.fixed_timeout == 20
        assert params.max_adaptive_timeout == 60

    def test_tick_times(self):
        """Test tick index maps to index * interval."""
        params = SimulationParameters(duration=50, tick_interval=10)
        assert params.tick_times().tolist() == [0, 10, 20, 30, 40]

    def test_fractional_tick_interval(self):
        """Test a duration that is a multiple of a fractional interval."""
        params = SimulationParameters(
            duration=1.0,
            tick_interval=0.1,
            fixed_timeout=0.2,
            adaptive_timeout=0.2,
            max_adaptive_timeout=0.6,
            presence_threshold=0.4,
            entry_time=0.2,
        )

        assert params.n_ticks == 10
        assert len(params.tick_times()) == 10
        assert params.tick_times()[-1] == pytest.approx(0.9)

        result = run_simulation(params.replace(seed=5))
        assert len(result.motion) == 10
        assert len(result.light_states["adaptive"]) == 10

    def test_fractional_interval_not_a_multiple(self):
        """Test a fractional interval that does not divide the duration."""
        with pytest.raises(InvalidParametersError, match="multiple"):
            SimulationParameters(duration=1.0, tick_interval=0.3)

    @pytest.mark.parametrize(
        "changes",
        [
            {"tick_interval": 0},
            {"tick_interval": -10},
            {"duration": 605},
            {"duration": 0},
            {"motion_probability": 0.0},
            {"motion_probability": 1.5},
            {"presence_threshold": -1},
            {"adaptive_timeout": 70, "max_adaptive_timeout": 60},
            {"fixed_timeout": -5},
            {"entry_time": -10},
        ],
    )
    def test_invalid(self, changes):
        """Test invalid parameters are rejected at construction."""
        with pytest.raises(InvalidParametersError):
            SimulationParameters(**changes)

    def test_invalid_is_value_error(self):
        """Test the error is a ValueError."""
        with pytest.raises(ValueError):
            SimulationParameters(motion_probability=2)

    def test_probability_one_allowed(self):
        """Test probability 1 is valid."""
        assert SimulationParameters(motion_probability=1.0).motion_probability == 1.0

    def test_immutable(self):
        """Test parameters cannot be modified."""
        params = SimulationParameters()
        with pytest.raises(AttributeError):
            params.duration = 10

    def test_replace_validates(self):
        """Test replace returns a validated copy."""
        params = SimulationParameters()
        assert params.replace(motion_probability=0.9).motion_probability == 0.9
        assert params.motion_probability == 0.4
        with pytest.raises(InvalidParametersError):
            params.replace(motion_probability=0)

    def test_from_dict_round_trip(self):
        """Test dictionary round trip."""
        params = SimulationParameters(duration=300, seed=3)
        assert SimulationParameters.from_dict(params.to_dict()) == params

    def test_from_dict_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(InvalidParametersError, match="Unknown"):
            SimulationParameters.from_dict({"durration": 300})

    def test_from_config(self):
        """Test building from an OmegaConf config."""
        config = OmegaConf.create({"simulation": {"duration": 120, "motion_probability": 0.7}})
        params = SimulationParameters.from_config(config)
        assert params.n_ticks == 12
        assert params.motion_probability == 0.7


class TestSimulationRun:
    """Tests for single simulation runs."""

    def test_trace_lengths(self):
        """Test every trace has n_ticks values."""
        for duration, interval in [(10, 10), (600, 10), (990, 30), (5, 1)]:
            params = SimulationParameters(duration=duration, tick_interval=interval, seed=1)
            result = run_simulation(params)
            n = params.n_ticks
            assert len(result.motion) == n
            assert len(result.occupancy) == n
            assert len(result.tick_times) == n
            for light in result.light_states.values():
                assert len(light) == n

    def test_continuous_motion_scenario(self, continuous_motion_params):
        """Test motion on every eligible tick gives no false negatives."""
        result = run_simulation(continuous_motion_params)

        assert result.n_ticks == 60
        assert result.occupancy[:2].tolist() == [False, False]
        assert result.occupancy[2:].all()
        for name, light in result.light_states.items():
            np.testing.assert_array_equal(light[2:], result.occupancy[2:].astype(np.int8))
            assert light[:2].tolist() == [0, 0]
            assert result.statistics[name].false_negatives == 0
            assert result.statistics[name].on_count == 58

    def test_seed_reproducible(self):
        """Test the same seed reproduces the same run."""
        params = SimulationParameters(seed=17)
        a = run_simulation(params)
        b = run_simulation(params)

        np.testing.assert_array_equal(a.motion, b.motion)
        assert a.statistics == b.statistics

    def test_injected_rng(self, fixed_sequence):
        """Test an injected uniform source drives the motion trace."""
        params = SimulationParameters(duration=50, tick_interval=10, entry_time=0)
        source = fixed_sequence([0.0, 0.9, 0.9, 0.9, 0.9])

        result = SimulationRun(params, rng=source).run()

        assert result.motion.tolist() == [1, 0, 0, 0, 0]
        assert result.light_states["fixed"].tolist() == [1, 1, 0, 0, 0]
        assert result.light_states["adaptive"].tolist() == [1, 1, 0, 0, 0]
        assert result.occupancy.tolist() == [True, True, True, True, True]
        assert result.statistics["fixed"].false_negatives == 3

    def test_adaptive_fewer_false_negatives(self):
        """Test adaptive policy never misses more ticks than fixed with equal base timeout."""
        for seed in range(10):
            result = run_simulation(SimulationParameters(seed=seed, motion_probability=0.3))
            assert (
                result.statistics["adaptive"].false_negatives
                <= result.statistics["fixed"].false_negatives
            )

    def test_to_dataframe(self, default_params):
        """Test per-tick table has one column per trace."""
        df = run_simulation(default_params).to_dataframe()
        assert list(df.columns) == ["time", "motion", "occupancy", "fixed", "adaptive"]
        assert len(df) == 60

    def test_to_dict_is_json_serializable(self, default_params):
        """Test dictionary form serializes to JSON."""
        data = run_simulation(default_params).to_dict()
        json.dumps(data)
        assert set(data["statistics"]) == {"fixed", "adaptive"}

    def test_summary(self, default_params):
        """Test summary mentions both policies."""
        summary = run_simulation(default_params).summary()
        assert "FIXED TIMEOUT" in summary
        assert "ADAPTIVE TIMEOUT" in summary


class TestExperimentRunner:
    """Tests for Monte Carlo experiments and sweeps."""

    def test_run_experiment(self):
        """Test repeated runs are aggregated."""
        runner = ExperimentRunner()
        result = runner.run_experiment("base", SimulationParameters(seed=4), runs=5)

        assert len(result.runs) == 5
        assert result.aggregate["fixed"].n_runs == 5
        assert "base" in runner.results

    def test_runs_are_independent(self):
        """Test each repetition draws a different trace."""
        result = ExperimentRunner().run_experiment("base", SimulationParameters(seed=4), runs=3)
        motions = [r.motion for r in result.runs]
        assert not np.array_equal(motions[0], motions[1])

    def test_experiment_reproducible(self):
        """Test a seeded experiment is reproducible."""
        params = SimulationParameters(seed=8)
        a = ExperimentRunner().run_experiment("a", params, runs=4)
        b = ExperimentRunner().run_experiment("a", params, runs=4)
        assert a.aggregate == b.aggregate

    def test_invalid_runs(self):
        """Test at least one run is required."""
        with pytest.raises(ValueError):
            ExperimentRunner().run_experiment("x", SimulationParameters(), runs=0)

    def test_sweep(self):
        """Test one experiment per probability."""
        runner = ExperimentRunner()
        results = runner.run_sweep(SimulationParameters(seed=2), [0.2, 0.5, 1.0], runs=3)

        assert list(results) == ["p=0.20", "p=0.50", "p=1.00"]
        assert results["p=0.50"].parameters.motion_probability == 0.5
        full = results["p=1.00"].aggregate
        assert full["fixed"].false_negatives_mean == 0.0
        assert full["adaptive"].false_negatives_mean == 0.0

    def test_sweep_energy_grows_with_probability(self):
        """Test more motion keeps lights on longer on average."""
        results = ExperimentRunner().run_sweep(
            SimulationParameters(seed=3), [0.05, 0.9], runs=20
        )
        low = results["p=0.05"].aggregate["fixed"].on_percentage_mean
        high = results["p=0.90"].aggregate["fixed"].on_percentage_mean
        assert high > low

    def test_saves_summaries(self, tmp_path):
        """Test summaries are written when an output directory is set."""
        runner = ExperimentRunner(output_dir=tmp_path)
        runner.run_sweep(SimulationParameters(seed=1), [0.4], runs=2)

        saved = json.loads((tmp_path / "p_0_40_summary.json").read_text())
        assert saved["n_runs"] == 2
        assert set(saved["aggregate"]) == {"fixed", "adaptive"}

    def test_comparison_table(self):
        """Test comparison table lists every experiment and policy."""
        runner = ExperimentRunner()
        assert runner.get_comparison_table() == "No results available."
        runner.run_experiment("base", SimulationParameters(seed=1), runs=2)
        table = runner.get_comparison_table()
        assert "base" in table
        assert "adaptive" in table
