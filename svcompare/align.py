"""
local pairwise alignment used to score the homology of breakpoint sequences against the reference
"""
from typing import NamedTuple

import numpy as np
from Bio.Align import PairwiseAligner


class AlignmentResult(NamedTuple):
    """
    Attributes:
        aligned_length: number of alignment columns (aligned bases plus gaps)
        score: the alignment score
        insertions: bases of the first sequence aligned to a gap
        deletions: bases of the second sequence aligned to a gap
    """

    aligned_length: int
    score: float
    insertions: int
    deletions: int


class LocalAligner:
    """
    Smith-Waterman local alignment of two DNA sequences

    Gap penalties are given as positive costs where a gap of length k costs gap_opening + k * gap_extension

    Example:
        >>> aligner = LocalAligner(match=2, mismatch=-6, gap_opening=5, gap_extension=3)
        >>> aligner.score('ACGTACGT', 'TTACGTAA')
        10.0
    """

    def __init__(self, match: float = 2, mismatch: float = -6, gap_opening: float = 5, gap_extension: float = 3):
        self.match = match
        self.mismatch = mismatch
        self.gap_opening = gap_opening
        self.gap_extension = gap_extension
        self._aligner = PairwiseAligner()
        self._aligner.mode = 'local'
        self._aligner.match_score = match
        self._aligner.mismatch_score = mismatch
        self._aligner.open_gap_score = -(gap_opening + gap_extension)
        self._aligner.extend_gap_score = -gap_extension

    def __repr__(self):
        return '{}(match={}, mismatch={}, gap_opening={}, gap_extension={})'.format(
            self.__class__.__name__, self.match, self.mismatch, self.gap_opening, self.gap_extension
        )

    def score(self, seq_a: str, seq_b: str) -> float:
        """
        Returns:
            the best local alignment score, 0 when either sequence is empty
        """
        if not seq_a or not seq_b:
            return 0.0
        return float(self._aligner.score(seq_a, seq_b))

    def align(self, seq_a: str, seq_b: str) -> AlignmentResult:
        """
        Returns:
            AlignmentResult: the lengths and score of the best local alignment. An empty alignment when there
            is no positive scoring alignment
        """
        score = self.score(seq_a, seq_b)
        if score <= 0:
            return AlignmentResult(0, 0.0, 0, 0)
        alignment = self._aligner.align(seq_a, seq_b)[0]
        steps_a, steps_b = np.diff(alignment.coordinates, axis=1)
        aligned = int(steps_a[(steps_a > 0) & (steps_b > 0)].sum())
        insertions = int(steps_a[steps_b == 0].sum())
        deletions = int(steps_b[steps_a == 0].sum())
        return AlignmentResult(aligned + insertions + deletions, float(alignment.score), insertions, deletions)
