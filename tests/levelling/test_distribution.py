"""
Tests for the distribution of water between the sides of a peak.
"""
import numpy as np
import pytest

from rainlevel.core.exceptions import WellCapacityError
from rainlevel.levelling.distribution import (
    DistributionRequest, distribute_water, rain_range, well_volume
)


def make_request(left, right, water, peak_height, peak_width=1, **kwargs):
    defaults = dict(at_left_edge=True, at_right_edge=True)
    defaults.update(kwargs)
    return DistributionRequest(
        water=water,
        peak_height=peak_height,
        peak_width=peak_width,
        left_grounds=np.asarray(left, dtype=float),
        right_grounds=np.asarray(right, dtype=float),
        **defaults,
    )


class TestHelpers:

    def test_well_volume(self):
        assert well_volume(np.array([3.0, 1.0]), 6.0) == 8.0
        assert well_volume(np.array([]), 6.0) == 0.0

    def test_rain_range(self):
        assert rain_range(3, np.array([1.0])) == 2.5


class TestDistributeWater:

    def test_empty_left_side(self):
        distribution = distribute_water(make_request([], [0, 0], 8.0, 5.0, 2))
        assert distribution.left == 0.0
        assert distribution.right == 8.0

    def test_empty_right_side(self):
        distribution = distribute_water(make_request([0, 0], [], 8.0, 5.0, 2))
        assert distribution.left == 8.0
        assert distribution.right == 0.0

    def test_rain_by_area(self):
        """Between two walls the peak's rain is split evenly"""
        distribution = distribute_water(make_request([0], [0], 3.0, 3.0))
        assert distribution.left == pytest.approx(1.5)
        assert distribution.right == pytest.approx(1.5)

    def test_plateau_is_shared(self):
        distribution = distribute_water(make_request([1], [1], 5.0, 8.0, 3))
        assert distribution.left == pytest.approx(2.5)
        assert distribution.right == pytest.approx(2.5)

    def test_interior_boundary_correction(self):
        """Sides away from the walls face the peaks beyond the range"""
        request = make_request(
            [0], [0], 6.0, 4.0, 2,
            at_left_edge=False, at_right_edge=False,
            left_edge_peaks=0, right_edge_peaks=1,
        )
        distribution = distribute_water(request)
        # ranges: left 1 + 1 + 0.5, right 1 + 1 + 1
        assert distribution.left == pytest.approx(2.5 / 5.5 * 6.0)
        assert distribution.right == pytest.approx(3.0 / 5.5 * 6.0)

    def test_overflow_to_other_side(self):
        """A full well passes its excess over the peak"""
        request = make_request(
            [3, 1], [4], 6.0, 6.0,
            at_left_edge=True, at_right_edge=False, right_edge_peaks=1,
        )
        distribution = distribute_water(request)
        # both sides get 3 by area, the right well holds only 2
        assert distribution.right == pytest.approx(2.0)
        assert distribution.left == pytest.approx(4.0)
        assert distribution.total == pytest.approx(6.0)

    def test_overflow_to_the_right(self):
        distribution = distribute_water(make_request([4], [3, 1], 6.0, 6.0))
        assert distribution.left == pytest.approx(2.0)
        assert distribution.right == pytest.approx(4.0)

    def test_overfilled_range_is_rejected(self):
        request = make_request([0], [0], 5.0, 1.0, start=2, end=4, depth=1)
        with pytest.raises(WellCapacityError) as exc_info:
            distribute_water(request)

        context = exc_info.value.context
        assert (context.start, context.end, context.depth) == (2, 4, 1)
        assert context.details["capacity"] == pytest.approx(1.0)
