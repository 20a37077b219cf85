"""
Test suite for the termination criteria in PhenoSim.

Tests cover:
- IterationLimit counting, reaching and resetting
- EarlyStopper plateau detection, history window and validation
"""

import pytest

from phenosim.evolutionary.stopping import EarlyStopper, IterationLimit


class TestIterationLimit:
    """Test the generation counter."""

    def test_counts_up_to_maximum(self):
        limit = IterationLimit(3)
        assert limit.get() == 0
        assert not limit.reached()

        for _ in range(3):
            limit.inc()

        assert limit.get() == 3
        assert limit.reached()

    def test_zero_maximum_is_reached_immediately(self):
        assert IterationLimit(0).reached()

    def test_reset(self):
        limit = IterationLimit(2)
        limit.inc()
        limit.inc()
        limit.reset()
        assert limit.get() == 0
        assert not limit.reached()

    def test_negative_maximum_rejected(self):
        with pytest.raises(ValueError):
            IterationLimit(-1)


class TestEarlyStopper:
    """Test plateau detection on the best fitness."""

    def test_constant_fitness_reaches_after_window(self):
        """Test identical values stop after exactly `window` updates."""
        stopper = EarlyStopper(delta=10.0, window=5)
        for i in range(4):
            stopper.update(0.0)
            assert not stopper.reached(), f"Reached too early after {i + 1} updates"
        stopper.update(0.0)
        assert stopper.reached()

    def test_large_change_restarts_plateau(self):
        """Test a change of at least delta resets the streak."""
        stopper = EarlyStopper(delta=1.0, window=3)
        stopper.update(0.0)
        stopper.update(0.5)
        assert stopper.streak == 2

        stopper.update(5.0)
        assert stopper.streak == 1
        assert not stopper.reached()

    def test_small_oscillation_counts_as_plateau(self):
        """Test values moving less than delta each step count as converged."""
        stopper = EarlyStopper(delta=0.1, window=4)
        for value in [1.0, 1.05, 1.0, 1.05]:
            stopper.update(value)
        assert stopper.reached()

    def test_steady_improvement_never_reaches(self):
        stopper = EarlyStopper(delta=0.5, window=3)
        for value in range(20):
            stopper.update(float(value))
        assert not stopper.reached()

    def test_zero_delta_never_reaches_with_window_above_one(self):
        """Test delta=0 needs a strictly smaller change, which cannot happen."""
        stopper = EarlyStopper(delta=0.0, window=2)
        for _ in range(10):
            stopper.update(1.0)
        assert not stopper.reached()

    def test_history_is_bounded_by_window(self):
        stopper = EarlyStopper(delta=1.0, window=3)
        for value in [1.0, 2.0, 3.0, 4.0, 5.0]:
            stopper.update(value)
        assert stopper.get_history() == [3.0, 4.0, 5.0]

    def test_reset(self):
        stopper = EarlyStopper(delta=1.0, window=2)
        stopper.update(1.0)
        stopper.update(1.0)
        assert stopper.reached()

        stopper.reset()
        assert not stopper.reached()
        assert stopper.get_history() == []

    def test_drift_below_delta_per_step_is_not_a_plateau(self):
        """Test the change is measured across the whole window, not per step."""
        stopper = EarlyStopper(delta=1.0, window=3)
        for value in [0.0, 0.9, 1.8]:
            stopper.update(value)
        assert stopper.streak == 3
        assert not stopper.reached()

    def test_window_end_points_compared(self):
        """Test only the oldest and newest value in the window decide."""
        stopper = EarlyStopper(delta=1.0, window=3)
        for value in [5.0, 0.0, 5.5, 0.2, 5.4]:
            stopper.update(value)
        assert stopper.get_history() == [5.5, 0.2, 5.4]
        assert stopper.reached()

    def test_not_reached_before_window_filled(self):
        stopper = EarlyStopper(delta=10.0, window=3)
        stopper.update(1.0)
        stopper.update(1.0)
        assert not stopper.reached()

    def test_nan_fitness_never_reaches(self):
        stopper = EarlyStopper(delta=10.0, window=2)
        stopper.update(float("nan"))
        stopper.update(float("nan"))
        assert not stopper.reached()

    @pytest.mark.parametrize("delta, window", [
        (-0.1, 5),
        (1.0, 0),
        (1.0, -2),
        (float("nan"), 5),
        (float("inf"), 5),
        ("0.5", 5),
        (1.0, "5"),
        (1.0, 2.5),
        (1.0, True),
    ])
    def test_invalid_parameters(self, delta, window):
        with pytest.raises(ValueError):
            EarlyStopper(delta, window)
