"""Tests for the fixed and adaptive timeout policies."""

from __future__ import annotations

import math

import numpy as np
import pytest

from lightsim.policies import (
    LIGHT_OFF,
    LIGHT_ON,
    AdaptiveTimeoutPolicy,
    BaseTimeoutPolicy,
    FixedTimeoutPolicy,
    adaptive_timeout_trace,
    create_policy,
    fixed_timeout_trace,
)
from lightsim.simulation import SimulationParameters


def isolated_motion(length: int, at: int) -> np.ndarray:
    motion = np.zeros(length, dtype=np.int8)
    motion[at] = 1
    return motion


class TestFixedTimeoutPolicy:
    """Tests for fixed timeout policy."""

    @pytest.fixture
    def policy(self):
        """Create a fixed policy with 20s timeout and 10s ticks."""
        return FixedTimeoutPolicy(timeout=20, tick_interval=10)

    def test_initial_state_is_off(self, policy):
        """Test quiet counter starts at the timeout."""
        assert policy.state.elapsed_quiet == 20
        assert policy.step(False) == LIGHT_OFF

    def test_all_quiet_stays_off(self, policy):
        """Test a quiet trace never turns the light on."""
        light = policy.run(np.zeros(30, dtype=np.int8))
        assert not light.any()

    def test_motion_turns_on(self, policy):
        """Test motion latches the light on."""
        assert policy.step(True) == LIGHT_ON
        assert policy.state.elapsed_quiet == 0

    @pytest.mark.parametrize("timeout", [10, 20, 25, 30, 60])
    def test_isolated_motion_duration(self, timeout):
        """Test isolated motion keeps the light on for ceil(timeout/interval) ticks."""
        light = fixed_timeout_trace(isolated_motion(40, 5), tick_interval=10, timeout=timeout)

        on_ticks = np.flatnonzero(light)
        expected = math.ceil(timeout / 10)
        assert len(on_ticks) == expected
        assert on_ticks.tolist() == list(range(5, 5 + expected))

    def test_motion_resets_timer(self, policy):
        """Test new motion restarts the quiet countdown."""
        light = policy.run([1, 0, 1, 0, 0, 0])
        assert light.tolist() == [1, 1, 1, 1, 0, 0]

    def test_continuous_motion(self, policy):
        """Test continuous motion keeps the light on."""
        assert policy.run(np.ones(10, dtype=np.int8)).all()

    def test_run_resets_state(self, policy):
        """Test consecutive runs are independent."""
        first = policy.run([1, 0, 0])
        second = policy.run([0, 0, 0])
        assert first.tolist() == [1, 1, 0]
        assert second.tolist() == [0, 0, 0]

    def test_zero_timeout(self):
        """Test zero timeout lights only motion ticks."""
        light = fixed_timeout_trace([0, 1, 0, 1, 1, 0], tick_interval=10, timeout=0)
        assert light.tolist() == [0, 1, 0, 1, 1, 0]

    def test_negative_timeout_rejected(self):
        """Test negative timeout is rejected."""
        with pytest.raises(ValueError):
            FixedTimeoutPolicy(timeout=-1, tick_interval=10)


class TestAdaptiveTimeoutPolicy:
    """Tests for adaptive timeout policy."""

    @pytest.fixture
    def policy(self):
        """Create an adaptive policy with 20s base, 60s cap and 10s ticks."""
        return AdaptiveTimeoutPolicy(base_timeout=20, max_timeout=60, tick_interval=10)

    def test_initial_state_is_off(self, policy):
        """Test countdown starts at zero."""
        assert policy.countdown == 0
        assert policy.step(False) == LIGHT_OFF

    def test_first_trigger_snaps_to_base(self, policy):
        """Test a trigger from idle grants the full base timeout."""
        assert policy.step(True) == LIGHT_ON
        assert policy.countdown == 20

    @pytest.mark.parametrize("base", [10, 20, 30, 50])
    def test_isolated_motion_duration(self, base):
        """Test isolated motion keeps the light on for base/interval ticks."""
        light = adaptive_timeout_trace(
            isolated_motion(40, 3), tick_interval=10, base_timeout=base, max_timeout=60
        )
        on_ticks = np.flatnonzero(light)
        assert len(on_ticks) == base // 10
        assert on_ticks[0] == 3

    def test_sustained_motion_extends(self, policy):
        """Test each further motion tick adds one interval."""
        for expected in [20, 30, 40, 50, 60]:
            policy.step(True)
            assert policy.countdown == expected

    def test_countdown_capped(self, policy):
        """Test countdown never exceeds the cap."""
        for _ in range(20):
            policy.step(True)
        assert policy.countdown == 60

    def test_decay_after_burst(self, policy):
        """Test light stays on while the countdown drains."""
        light = policy.run([1, 1, 1, 0, 0, 0, 0, 0])
        assert light.tolist() == [1, 1, 1, 1, 1, 1, 0, 0]

    def test_retrigger_after_off_snaps_again(self, policy):
        """Test a new trigger after the light went off starts from base."""
        policy.run([1, 0, 0, 0])
        assert policy.countdown == 0
        policy.step(True)
        assert policy.countdown == 20

    def test_retrigger_while_on_extends(self, policy):
        """Test motion during the countdown extends it by one interval."""
        policy.run([1, 0])
        assert policy.countdown == 10
        policy.step(True)
        assert policy.countdown == 20

    def test_countdown_bounds_under_stress(self, random_motion):
        """Test countdown stays within [0, max] for random sequences."""
        for base, cap, interval in [(20, 60, 10), (5, 7, 3), (0, 10, 10), (30, 30, 10)]:
            policy = AdaptiveTimeoutPolicy(base, cap, interval)
            for motion in random_motion:
                policy.reset()
                for m in motion:
                    light = policy.step(bool(m))
                    assert 0 <= policy.countdown <= cap
                    assert light == (LIGHT_ON if m or policy.countdown > 0 else LIGHT_OFF)

    def test_stickier_than_fixed(self, random_motion):
        """Test adaptive light is on whenever fixed light is on (same base timeout)."""
        for motion in random_motion:
            fixed = fixed_timeout_trace(motion, tick_interval=10, timeout=20)
            adaptive = adaptive_timeout_trace(motion, tick_interval=10, base_timeout=20, max_timeout=60)
            assert (adaptive >= fixed).all()

    def test_base_above_cap_rejected(self):
        """Test base timeout larger than the cap is rejected."""
        with pytest.raises(ValueError):
            AdaptiveTimeoutPolicy(base_timeout=70, max_timeout=60, tick_interval=10)


class TestCreatePolicy:
    """Tests for the policy factory."""

    def test_creates_both_policies(self):
        """Test factory maps parameters onto policies."""
        params = SimulationParameters(fixed_timeout=30, adaptive_timeout=40, max_adaptive_timeout=90)

        fixed = create_policy("fixed", params)
        adaptive = create_policy("adaptive", params)

        assert isinstance(fixed, FixedTimeoutPolicy)
        assert fixed.timeout == 30
        assert isinstance(adaptive, AdaptiveTimeoutPolicy)
        assert adaptive.get_config()["base_timeout"] == 40
        assert adaptive.get_config()["max_timeout"] == 90
        assert isinstance(fixed, BaseTimeoutPolicy)

    def test_unknown_policy(self):
        """Test unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown policy"):
            create_policy("motion_sensor", SimulationParameters())
