"""
Tests for the per column output buffer.
"""
import numpy as np
import pytest

from rainlevel.core.exceptions import CollectorError
from rainlevel.levelling.collector import Collector


class TestCollector:

    @pytest.fixture
    def collector(self):
        return Collector(5)

    def test_initially_unresolved(self, collector):
        assert not collector.complete
        assert np.all(np.isnan(collector.segments))
        assert np.all(collector.depths == -1)

    def test_levels(self, collector):
        collector.set_levels(0, 2, 3.5, depth=1, lift=-0.5)
        collector.set_level(3, 8.0)
        collector.set_level(4, 2.0, depth=2)

        assert collector.complete
        np.testing.assert_array_equal(collector.levels(), [3.5, 3.5, 3.5, 8.0, 2.0])
        np.testing.assert_array_equal(collector.depths, [1, 1, 1, 0, 2])
        assert collector.lifts[0] == -0.5
        assert np.isnan(collector.lifts[3])

    def test_levels_returns_a_copy(self, collector):
        collector.set_levels(0, 4, 1.0)
        collector.levels()[0] = 99.0
        assert collector.levels()[0] == 1.0

    def test_written_once(self, collector):
        collector.set_levels(1, 3, 2.0)
        with pytest.raises(CollectorError):
            collector.set_level(2, 5.0)
        assert collector.segments[2] == 2.0

    def test_unwritten_columns(self, collector):
        collector.set_levels(0, 3, 2.0)
        with pytest.raises(CollectorError, match=r"\[4\]"):
            collector.levels()

    @pytest.mark.parametrize("start,end", [(-1, 2), (3, 5), (3, 2)])
    def test_invalid_range(self, collector, start, end):
        with pytest.raises(CollectorError):
            collector.set_levels(start, end, 1.0)
