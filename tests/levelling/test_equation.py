"""
Tests for the levelling residual.
"""
import numpy as np
import pytest

from rainlevel.levelling.equation import (
    LevellingEquation, displaced_volume, levelling_residual
)


@pytest.fixture
def watershed():
    return np.array([0.0, 3.0, 0.0])


class TestLevellingResidual:

    def test_zero_lift_is_found(self, watershed):
        assert levelling_residual(0.0, 3.0, watershed) == 0.0
        assert levelling_residual(1e-20, 3.0, watershed) == 0.0

    def test_positive_lift_overshoots(self, watershed):
        assert levelling_residual(0.5, 3.0, watershed) == 0.5

    def test_negative_lift(self, watershed):
        # only the peak sits above the baseline: displaced 1, underwater 1
        assert displaced_volume(-2.0, watershed) == pytest.approx(1.0)
        assert levelling_residual(-2.0, 3.0, watershed) == pytest.approx(-1.0 / 3.0)

    def test_saturation_root(self, watershed):
        """Lifting by -1.5 and filling with 3 units reaches the peak exactly"""
        assert levelling_residual(-1.5, 3.0, watershed) == pytest.approx(0.0, abs=1e-15)

    def test_increasing_below_zero(self, watershed):
        xs = np.linspace(-2.9, -0.1, 15)
        values = [levelling_residual(x, 3.0, watershed) for x in xs]
        assert all(b >= a for a, b in zip(values, values[1:]))


class TestLevellingEquation:

    def test_callable(self, watershed):
        equation = LevellingEquation(water=3.0, grounds=watershed)
        assert equation(-2.0) == levelling_residual(-2.0, 3.0, watershed)

    def test_initial_guess(self, watershed):
        equation = LevellingEquation(water=3.0, grounds=watershed)
        assert equation.initial_guess() == pytest.approx(-2.0)
        assert equation.initial_guess(0.8) == pytest.approx(-2.2)

    def test_initial_guess_of_submerged_range_is_zero(self, watershed):
        equation = LevellingEquation(water=180.0, grounds=watershed)
        assert equation.initial_guess() == 0.0
        assert equation(equation.initial_guess()) == 0.0
