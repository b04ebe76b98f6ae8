from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..breakpoint import BreakendStore
from ..constants import COLUMNS
from ..interval import min_distance, max_distance
from ..overlap import find_overlaps
from ..util import logger


def event_size(store: BreakendStore) -> Tuple[np.ndarray, np.ndarray]:
    """
    the range of possible event sizes for each breakend. This is the distance between the breakend and
    its partner (taking the breakend intervals into account) plus the insertion length

    Returns:
        the minimum and maximum event size for each breakend in the store
    """
    partners = store.partner_indices
    starts, ends = store.starts, store.ends
    inserted = store.insertion_lengths()
    size_min = min_distance(starts, ends, starts[partners], ends[partners]) + inserted
    size_max = max_distance(starts, ends, starts[partners], ends[partners]) + inserted
    return size_min, size_max


def merge_partner_hits(
    query_hits: np.ndarray,
    subject_hits: np.ndarray,
    partner_query_hits: np.ndarray,
    partner_subject_hits: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    keep only the hits found both by the breakend overlap and by the partner overlap

    Both sets of hits are combined and sorted by query and then subject index. A record is kept when it
    is equal to the record preceding it. Marking the duplicates of the entire hit set instead does not
    scale to large (focal false positive) hit sets

    Returns:
        the query and subject indices of the breakpoint matches, sorted
    """
    all_query = np.concatenate([query_hits, partner_query_hits])
    all_subject = np.concatenate([subject_hits, partner_subject_hits])
    order = np.lexsort((all_subject, all_query))
    all_query = all_query[order]
    all_subject = all_subject[order]
    is_dup = np.zeros(len(all_query), dtype=bool)
    is_dup[1:] = (all_query[1:] == all_query[:-1]) & (all_subject[1:] == all_subject[:-1])
    return all_query[is_dup], all_subject[is_dup]


def find_breakpoint_overlaps(
    query: BreakendStore,
    subject: BreakendStore,
    max_gap: int = 0,
    min_overlap: int = 1,
    ignore_strand: bool = False,
    size_margin: Optional[float] = 0.25,
    restrict_margin_to_size_multiple: Optional[float] = 0.5,
) -> pd.DataFrame:
    """
    Finds overlapping breakpoints by requiring that the breakends on both sides overlap

    Args:
        query: the query breakends
        subject: the subject breakends
        max_gap: see :func:`~svcompare.overlap.find_overlaps`
        min_overlap: see :func:`~svcompare.overlap.find_overlaps`
        ignore_strand: match breakends regardless of strand
        size_margin: error margin in allowable size to prevent matching of events of different sizes such
            as a 200bp event matching a 1bp event when max_gap is set to 200. None disables the size and
            position filters
        restrict_margin_to_size_multiple: size restriction multiplier on event size. The default value of
            0.5 requires that the breakpoint positions can be off by at maximum, half the event size. This
            ensures that small deletions do actually overlap at least one base pair

    Returns:
        one row per breakpoint match with the query_hits and subject_hits indices and, when the size
        filter is applied, the sizeerror, localbperror and remotebperror columns
    """
    query_hits, subject_hits = find_overlaps(query, subject, max_gap, min_overlap, ignore_strand)
    # the partner breakends of a hit are looked up rather than overlapped a second time
    query_hits, subject_hits = merge_partner_hits(
        query_hits,
        subject_hits,
        query.partner_indices[query_hits],
        subject.partner_indices[subject_hits],
    )
    logger.debug(f'{len(query_hits)} breakpoint matches before size filtering')
    hits = pd.DataFrame({COLUMNS.query_hits: query_hits, COLUMNS.subject_hits: subject_hits})

    if size_margin is None or pd.isna(size_margin):
        return hits

    query_size_min, query_size_max = event_size(query)
    subject_size_min, subject_size_max = event_size(subject)
    hits[COLUMNS.size_error] = min_distance(
        query_size_min[query_hits],
        query_size_max[query_hits],
        subject_size_min[subject_hits],
        subject_size_max[subject_hits],
    )
    smaller_size = np.minimum(query_size_max[query_hits], subject_size_max[subject_hits])
    # the -1 allows for off-by-one rounding of the event size
    keep = (hits[COLUMNS.size_error].to_numpy() - 1) < size_margin * smaller_size
    hits = hits.loc[keep].reset_index(drop=True)
    smaller_size = smaller_size[keep]

    query_hits = hits[COLUMNS.query_hits].to_numpy()
    subject_hits = hits[COLUMNS.subject_hits].to_numpy()
    query_partners = query.partner_indices[query_hits]
    subject_partners = subject.partner_indices[subject_hits]
    hits[COLUMNS.local_breakpoint_error] = min_distance(
        query.starts[query_hits], query.ends[query_hits], subject.starts[subject_hits], subject.ends[subject_hits]
    )
    hits[COLUMNS.remote_breakpoint_error] = min_distance(
        query.starts[query_partners],
        query.ends[query_partners],
        subject.starts[subject_partners],
        subject.ends[subject_partners],
    )
    if restrict_margin_to_size_multiple is not None and not pd.isna(restrict_margin_to_size_multiple):
        allowable_error = smaller_size * restrict_margin_to_size_multiple + 1
        keep = (hits[COLUMNS.local_breakpoint_error].to_numpy() <= allowable_error) & (
            hits[COLUMNS.remote_breakpoint_error].to_numpy() <= allowable_error
        )
        hits = hits.loc[keep].reset_index(drop=True)
    logger.debug(f'{len(hits)} breakpoint matches after size filtering')
    return hits


def count_hits(
    hits: pd.DataFrame, num_query: int, count_only_best: bool = False, scores: Optional[Sequence] = None
) -> np.ndarray:
    """
    tabulate the matches of each query breakend

    Args:
        hits: breakpoint matches as returned by :func:`find_breakpoint_overlaps`
        num_query: number of query breakends
        count_only_best: each subject breakend is counted only for the query breakend with the highest score.
            Ties are resolved in favour of the lowest query index
        scores: score of each query breakend, required when count_only_best is set

    Returns:
        the number of distinct subject breakends matched by each query breakend
    """
    hits = hits[[COLUMNS.query_hits, COLUMNS.subject_hits]].drop_duplicates()
    if count_only_best:
        if scores is None:
            raise ValueError('scores are required to count only the best matches')
        scores = np.array([np.nan if s is None else float(s) for s in scores], dtype=float)
        hits = hits.assign(score=scores[hits[COLUMNS.query_hits].to_numpy()])
        hits = hits.sort_values(
            ['score', COLUMNS.query_hits], ascending=[False, True], na_position='last', kind='mergesort'
        )
        hits = hits.drop_duplicates(subset=[COLUMNS.subject_hits], keep='first')
    return np.bincount(hits[COLUMNS.query_hits].to_numpy(dtype=np.int64), minlength=num_query)


def count_breakpoint_overlaps(
    query: BreakendStore,
    subject: BreakendStore,
    count_only_best: bool = False,
    score_column: str = COLUMNS.quality,
    max_gap: int = 0,
    min_overlap: int = 1,
    ignore_strand: bool = False,
    size_margin: Optional[float] = 0.25,
    restrict_margin_to_size_multiple: Optional[float] = 0.5,
) -> np.ndarray:
    """
    Finds common breakpoints between the two breakpoint sets

    Args:
        count_only_best: count each subject breakpoint as overlapping only the best overlapping query breakpoint
        score_column: query breakend column defining the score used to determine which query breakpoint is
            considered the best when count_only_best is set

    Returns:
        the tabulated query overlap hits
    """
    hits = find_breakpoint_overlaps(
        query,
        subject,
        max_gap=max_gap,
        min_overlap=min_overlap,
        ignore_strand=ignore_strand,
        size_margin=size_margin,
        restrict_margin_to_size_multiple=restrict_margin_to_size_multiple,
    )
    scores = query.column(score_column) if count_only_best else None
    return count_hits(hits, len(query), count_only_best=count_only_best, scores=scores)
