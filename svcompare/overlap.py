"""
interval overlap join between the breakends of two stores
"""
from typing import Dict, Tuple

import numpy as np
from intervaltree import IntervalTree

from .breakpoint import BreakendStore
from .util import logger


def _group_key(chr: str, reverse: bool, ignore_strand: bool) -> Tuple:
    return (chr,) if ignore_strand else (chr, bool(reverse))


def build_breakend_index(store: BreakendStore, ignore_strand: bool = False) -> Dict[Tuple, IntervalTree]:
    """
    an interval tree of the breakends for each contig (and strand unless ignoring strand). Tree
    intervals are half-open so the closed breakend interval [start, end] is stored as [start, end + 1)
    with the breakend index as the data
    """
    trees: Dict[Tuple, IntervalTree] = {}
    for index, (chr, reverse, start, end) in enumerate(zip(store.chrs, store.reverse, store.starts, store.ends)):
        key = _group_key(chr, reverse, ignore_strand)
        trees.setdefault(key, IntervalTree()).addi(int(start), int(end) + 1, index)
    return trees


def find_overlaps(
    query: BreakendStore,
    subject: BreakendStore,
    max_gap: int = 0,
    min_overlap: int = 1,
    ignore_strand: bool = False,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    find all pairs of query and subject breakends which overlap. Breakends overlap when they are on the
    same contig (and strand, unless ignoring strand) and the query interval, expanded by max_gap on
    either side, shares at least min_overlap bases with the subject interval

    The subject breakends are indexed in interval trees and each query only visits the subjects it
    shares at least one base with, so the cost is proportional to the input plus the number of overlaps

    Args:
        query: the query breakends
        subject: the subject breakends
        max_gap: the largest separation between breakends which are still considered to overlap
        min_overlap: the smallest number of bases shared for breakends to overlap

    Returns:
        the query and subject indices of every overlapping pair (unordered)
    """
    query_hits = []
    subject_hits = []
    trees = build_breakend_index(subject, ignore_strand)
    # a minimum overlap below one base also accepts subjects separated from the query
    slack = max(0, 1 - min_overlap)

    for index, (chr, reverse, start, end) in enumerate(zip(query.chrs, query.reverse, query.starts, query.ends)):
        tree = trees.get(_group_key(chr, reverse, ignore_strand))
        if tree is None:
            continue
        qstart = int(start) - max_gap
        qend = int(end) + max_gap
        for candidate in tree.overlap(qstart - slack, qend + 1 + slack):
            shared = min(qend, candidate.end - 1) - max(qstart, candidate.begin) + 1
            if shared >= min_overlap:
                query_hits.append(index)
                subject_hits.append(candidate.data)

    logger.debug(f'found {len(query_hits)} breakend overlaps')
    return np.array(query_hits, dtype=np.int64), np.array(subject_hits, dtype=np.int64)
