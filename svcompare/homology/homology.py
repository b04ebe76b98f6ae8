import warnings
from typing import List, Optional, Type

import numpy as np
import pandas as pd

from ..align import LocalAligner
from ..breakpoint import BreakendStore
from ..constants import COLUMNS, UNKNOWN_BASE
from ..error import DegenerateAlignmentInput
from ..sequence import breakpoint_sequence, extract_reference_sequence
from ..util import logger

HOMOLOGY_COLUMNS = [
    COLUMNS.exact_homology_length,
    COLUMNS.inexact_homology_length,
    COLUMNS.inexact_homology_score,
]


def shrink_anchor_lengths(store: BreakendStore, anchor_length: int) -> List[int]:
    """
    limit the anchor to the event size (plus one) so that the anchor of a small event does not span past it
    """
    result = []
    for breakend in store:
        if breakend.sv_length is None:
            result.append(anchor_length)
        else:
            result.append(min(anchor_length, abs(breakend.sv_length) + 1))
    return result


def _null_homology(size: int) -> pd.DataFrame:
    return _homology_frame(np.full(size, np.nan), np.full(size, np.nan), np.full(size, np.nan))


def _homology_frame(exact: np.ndarray, inexact: np.ndarray, score: np.ndarray) -> pd.DataFrame:
    def nullable(values, dtype):
        return pd.array([pd.NA if np.isnan(v) else v for v in values], dtype=dtype)

    return pd.DataFrame(
        {
            COLUMNS.exact_homology_length: nullable(np.round(exact), 'Int64'),
            COLUMNS.inexact_homology_length: nullable(inexact, 'Int64'),
            COLUMNS.inexact_homology_score: nullable(score, 'Float64'),
        }
    )


def calculate_reference_homology(
    store: BreakendStore,
    reference,
    anchor_length: int = 300,
    margin: int = 5,
    match: float = 2,
    mismatch: float = -6,
    gap_opening: float = 5,
    gap_extension: float = 3,
    aligner_cls: Optional[Type] = None,
) -> pd.DataFrame:
    """
    Calculates the length of inexact homology between the breakpoint sequence and the reference

    The breakpoint sequence (anchor, untemplated sequence and partner side) is aligned to the reference
    sequence continuing past the breakpoint. The homology is the part of the alignment beyond the anchor
    and is calculated from both sides of the breakpoint

    Args:
        store: the breakends
        reference: the sequence source
        anchor_length: number of bases to consider for homology
        margin: number of additional reference bases to include. This allows for inexact homology to be
            detected even in the presence of indels
        match: see :class:`~svcompare.align.LocalAligner`
        mismatch: see :class:`~svcompare.align.LocalAligner`
        gap_opening: see :class:`~svcompare.align.LocalAligner`
        gap_extension: see :class:`~svcompare.align.LocalAligner`
        aligner_cls: the local aligner class, defaults to :class:`~svcompare.align.LocalAligner`

    Returns:
        pandas.DataFrame: one row per breakend (in store order) with the exacthomlen, inexacthomlen and
        inexactscore columns. Missing values are used where homology could not be calculated
    """
    if aligner_cls is None:
        aligner_cls = LocalAligner
    size = len(store)
    partners = store.partner_indices
    if not size:
        return _null_homology(0)

    anchor_seqs = extract_reference_sequence(store, reference, shrink_anchor_lengths(store, anchor_length), 0)
    # anchors reaching past the contig end are shortened to the bases after the last unknown base
    anchor_seqs = [seq.rsplit(UNKNOWN_BASE, 1)[-1] for seq in anchor_seqs]
    anchor_lengths = np.array([len(seq) for seq in anchor_seqs], dtype=np.int64)

    failed = np.zeros(size, dtype=bool)
    constricted = store.constrict()
    breakpoint_seqs = []
    for index, breakend in enumerate(constricted):
        try:
            seq = breakpoint_sequence(
                breakend,
                constricted.partner_breakend(index),
                reference,
                int(anchor_lengths[index]),
                int(anchor_lengths[index]),
            )
        except ValueError as err:
            logger.warning(f'unable to build the breakpoint sequence for breakend ({breakend.name}): {err}')
            failed[index] = True
            seq = ''
        breakpoint_seqs.append(seq.split(UNKNOWN_BASE, 1)[0])
    breakpoint_lengths = [max(0, len(seq) - alen) for seq, alen in zip(breakpoint_seqs, anchor_lengths)]

    following_seqs = extract_reference_sequence(store, reference, 0, [b + margin for b in breakpoint_lengths])
    following_seqs = [seq.split(UNKNOWN_BASE, 1)[0] for seq in following_seqs]
    reference_seqs = [anchor + following for anchor, following in zip(anchor_seqs, following_seqs)]

    if all(seq == '' for seq in reference_seqs) and all(seq == '' for seq in breakpoint_seqs):
        warnings.warn(
            DegenerateAlignmentInput(f'all {size} breakpoint and reference sequences are empty'), stacklevel=2
        )
        return _null_homology(size)

    aligner = aligner_cls(match=match, mismatch=mismatch, gap_opening=gap_opening, gap_extension=gap_extension)
    inexact_length = np.zeros(size, dtype=float)
    inexact_score = np.zeros(size, dtype=float)
    for index, (breakpoint_seq, reference_seq) in enumerate(zip(breakpoint_seqs, reference_seqs)):
        aln = aligner.align(breakpoint_seq, reference_seq)
        inexact_length[index] = aln.aligned_length - anchor_lengths[index] - aln.deletions - aln.insertions
        inexact_score[index] = aln.score
    bp_inexact_length = inexact_length + inexact_length[partners]
    bp_inexact_score = inexact_score + inexact_score[partners] - 2 * anchor_lengths * match

    # longest common substring as a local alignment where no mismatch or gap can ever be worthwhile
    penalty = anchor_length * match
    exact_aligner = aligner_cls(match=match, mismatch=-penalty, gap_opening=penalty, gap_extension=0)
    exact_length = np.array(
        [
            exact_aligner.score(breakpoint_seq, reference_seq) / match - alen
            for breakpoint_seq, reference_seq, alen in zip(breakpoint_seqs, reference_seqs, anchor_lengths)
        ],
        dtype=float,
    )
    bp_exact_length = exact_length + exact_length[partners]

    null = (anchor_lengths == 0) | failed | failed[partners]
    for values in [bp_exact_length, bp_inexact_length, bp_inexact_score]:
        values[null] = np.nan
    logger.debug(f'calculated homology for {size - int(null.sum())} of {size} breakends')
    return _homology_frame(bp_exact_length, bp_inexact_length, bp_inexact_score)
