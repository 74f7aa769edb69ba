"""
Tests for the problem definition.
"""
import numpy as np
import pytest

from rainlevel.core.exceptions import ProblemDefinitionError
from rainlevel.model.problem import Problem


class TestProblem:

    @pytest.fixture
    def problem(self):
        return Problem.from_profile(1, [5, 5, 0, 0, 0, 0, 5, 5])

    def test_derived_quantities(self, problem):
        assert problem.water_0 == 1.0
        assert problem.size == 8
        assert problem.water_tot == 8.0
        assert problem.ground_max == 5
        assert problem.ground_min == 0
        assert problem.ground_vol == 20
        assert problem.saturation_water == 20

    def test_grounds_array(self, problem):
        arr = problem.grounds_array
        assert arr.dtype == float
        np.testing.assert_array_equal(arr, [5, 5, 0, 0, 0, 0, 5, 5])

    def test_is_immutable(self, problem):
        with pytest.raises(AttributeError):
            problem.water_tot = 3.0

    def test_reversed(self):
        problem = Problem.from_profile(2, [0, 0, 5, 6, 7])
        mirrored = problem.reversed()
        assert mirrored.grounds == (7, 6, 5, 0, 0)
        assert mirrored.water_tot == problem.water_tot

    def test_accepts_numpy_integers(self):
        problem = Problem.from_profile(np.int64(2), np.array([3, 0, 3]))
        assert problem.grounds == (3, 0, 3)
        assert problem.water_tot == 6.0

    @pytest.mark.parametrize("duration,profile", [
        (1, []),            # empty profile
        (1, [3, -1, 2]),    # negative height
        (1, [3, 1.5, 2]),   # non-integer height
        (-1, [3, 1, 2]),    # negative duration
        (1.5, [3, 1, 2]),   # non-integer duration
        (True, [3, 1, 2]),  # bool is not a duration
    ])
    def test_preconditions(self, duration, profile):
        with pytest.raises(ProblemDefinitionError):
            Problem.from_profile(duration, profile)
