from svcompare.align import AlignmentResult, LocalAligner


class TestLocalAligner:
    def test_score(self):
        aligner = LocalAligner(match=2, mismatch=-6, gap_opening=5, gap_extension=3)
        assert aligner.score('ACGTACGT', 'TTACGTAA') == 10

    def test_score_empty(self):
        aligner = LocalAligner()
        assert aligner.score('', 'ACGT') == 0
        assert aligner.score('ACGT', '') == 0

    def test_align_identical(self):
        result = LocalAligner().align('ACGTACGT', 'ACGTACGT')
        assert result == AlignmentResult(8, 16, 0, 0)

    def test_align_no_positive_alignment(self):
        assert LocalAligner().align('AAAA', 'TTTT') == AlignmentResult(0, 0, 0, 0)

    def test_align_empty(self):
        assert LocalAligner().align('', 'ACGT') == AlignmentResult(0, 0, 0, 0)

    def test_align_deletion(self):
        result = LocalAligner().align('ACGTTGCAAT' + 'CCTAGGATCA', 'ACGTTGCAAT' + 'G' + 'CCTAGGATCA')
        assert result.aligned_length == 21
        assert result.deletions == 1
        assert result.insertions == 0
        assert result.score == 40 - 8

    def test_align_insertion(self):
        result = LocalAligner().align('ACGTTGCAAT' + 'G' + 'CCTAGGATCA', 'ACGTTGCAAT' + 'CCTAGGATCA')
        assert result.aligned_length == 21
        assert result.deletions == 0
        assert result.insertions == 1
        assert result.score == 40 - 8

    def test_exact_matching_penalties(self):
        penalty = 300 * 2
        aligner = LocalAligner(match=2, mismatch=-penalty, gap_opening=penalty, gap_extension=0)
        # longest common substring is CCCCC
        assert aligner.score('AAAGCCCCCGT', 'TTCCCCCAT') / 2 == 5

    def test_repr(self):
        assert repr(LocalAligner()) == 'LocalAligner(match=2, mismatch=-6, gap_opening=5, gap_extension=3)'
