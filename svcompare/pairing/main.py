import os
from typing import Dict

import numpy as np
import pandas as pd

from ..breakpoint import BreakendStore
from ..constants import COLUMNS, SUBCOMMAND
from ..util import logger, mkdirp, output_tabbed_file, read_bedpe
from .pairing import count_hits, find_breakpoint_overlaps


def breakend_table(store: BreakendStore) -> pd.DataFrame:
    """
    one row per breakend with its id and coordinates first, followed by any other attributes
    """
    leading = [
        COLUMNS.breakend_id,
        COLUMNS.partner,
        COLUMNS.chromosome,
        COLUMNS.start,
        COLUMNS.end,
        COLUMNS.strand,
    ]
    df = pd.DataFrame.from_records([b.flatten() for b in store])
    if df.empty:
        return pd.DataFrame(columns=leading)
    return df[leading + [c for c in df.columns if c not in leading]]


def main(
    query: str,
    subject: str,
    output: str,
    config: Dict,
    command: str = SUBCOMMAND.OVERLAP,
):
    """
    Args:
        query: path to the query BEDPE file
        subject: path to the subject BEDPE file
        output: path to the output file
        config: the flattened run configuration
        command: write the breakpoint matches (overlap) or the number of matches per query breakend (count)
    """
    query_store = read_bedpe(query, placeholder_name=config['pairing.placeholder_name'])
    subject_store = read_bedpe(subject, placeholder_name=config['pairing.placeholder_name'])

    logger.info(f'matching {len(query_store)} query against {len(subject_store)} subject breakends')
    hits = find_breakpoint_overlaps(
        query_store,
        subject_store,
        max_gap=config['pairing.max_gap'],
        min_overlap=config['pairing.min_overlap'],
        ignore_strand=config['pairing.ignore_strand'],
        size_margin=config['pairing.size_margin'],
        restrict_margin_to_size_multiple=config['pairing.restrict_margin_to_size_multiple'],
    )
    logger.info(f'found {len(hits)} breakpoint matches')

    if os.path.dirname(output):
        mkdirp(os.path.dirname(output))

    if command == SUBCOMMAND.OVERLAP:
        query_names = np.array(query_store.names(), dtype=object)
        subject_names = np.array(subject_store.names(), dtype=object)
        hits.insert(0, COLUMNS.query_id, query_names[hits[COLUMNS.query_hits].to_numpy(dtype=np.int64)])
        hits.insert(1, COLUMNS.subject_id, subject_names[hits[COLUMNS.subject_hits].to_numpy(dtype=np.int64)])
        output_tabbed_file(hits, output)
        return

    count_only_best = config['pairing.count_only_best']
    scores = query_store.column(config['pairing.score_column']) if count_only_best else None
    counts = count_hits(hits, len(query_store), count_only_best=count_only_best, scores=scores)
    rows = breakend_table(query_store)
    rows[COLUMNS.overlap_count] = counts
    logger.info(f'{int((counts > 0).sum())} of {len(query_store)} query breakends have a match')
    output_tabbed_file(rows, output)
