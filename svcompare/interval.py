import numpy as np


class Interval:
    """
    closed integer interval, coordinates are given as 1-indexed
    """

    def __init__(self, start, end=None):
        """
        Args:
            start (int): the start of the interval (inclusive)
            end (int): the end of the interval (inclusive)
        """
        self.start = int(start)
        self.end = int(end) if end is not None else self.start
        if self.start > self.end:
            raise AttributeError('interval start > end is not allowed', self.start, self.end)


def min_distance(start1, end1, start2, end2):
    """
    the smallest possible distance between a position in the first interval and a position in the
    second, for arrays of interval bounds. Overlapping intervals have a distance of 0

    Example:
        >>> min_distance(np.array([1, 1]), np.array([4, 4]), np.array([10, 3]), np.array([12, 12]))
        array([6, 0])
    """
    return np.maximum(0, np.maximum(start1, start2) - np.minimum(end1, end2))


def max_distance(start1, end1, start2, end2):
    """
    the largest possible distance between a position in the first interval and a position in the
    second, for arrays of interval bounds

    Example:
        >>> max_distance(np.array([1]), np.array([4]), np.array([10]), np.array([12]))
        array([11])
    """
    return np.maximum(end2 - start1, end1 - start2)
