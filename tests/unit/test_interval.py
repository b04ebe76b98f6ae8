import numpy as np
import pytest

from svcompare.interval import Interval, max_distance, min_distance


class TestInterval:
    def test___init__error(self):
        with pytest.raises(AttributeError):
            Interval(4, 3)

    def test___init__single_position(self):
        interval = Interval(5)
        assert interval.start == 5
        assert interval.end == 5

    def test___init__cast(self):
        interval = Interval('5', 7.0)
        assert (interval.start, interval.end) == (5, 7)


def bounds(*intervals):
    return [np.array(column) for column in zip(*intervals)]


class TestDistance:
    def test_min_distance(self):
        start1, end1 = bounds((1, 4), (10, 12), (1, 4), (1, 4))
        start2, end2 = bounds((10, 12), (1, 4), (3, 12), (4, 12))
        assert min_distance(start1, end1, start2, end2).tolist() == [6, 6, 0, 0]

    def test_min_distance_adjacent(self):
        assert min_distance(*bounds((100, 100)), *bounds((101, 101))).tolist() == [1]

    def test_max_distance(self):
        start1, end1 = bounds((1, 4), (10, 12), (3, 3))
        start2, end2 = bounds((10, 12), (1, 4), (1, 9))
        assert max_distance(start1, end1, start2, end2).tolist() == [11, 11, 6]

    def test_min_not_greater_than_max(self):
        rng = np.random.default_rng(7)
        start1 = rng.integers(1, 100, 50)
        end1 = start1 + rng.integers(0, 20, 50)
        start2 = rng.integers(1, 100, 50)
        end2 = start2 + rng.integers(0, 20, 50)
        assert np.all(min_distance(start1, end1, start2, end2) <= max_distance(start1, end1, start2, end2))
