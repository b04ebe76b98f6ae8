import logging
import os
from glob import glob
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd
from braceexpand import braceexpand

from .breakpoint import Breakend, BreakendStore, BreakpointPair
from .constants import COLUMNS, STRAND, cast_boolean

logger = logging.getLogger('svcompare')

BEDPE_COLUMNS = ['chrom1', 'start1', 'end1', 'chrom2', 'start2', 'end2', 'name', 'score', 'strand1', 'strand2']
NULL_VALUES = {'none', 'null', '.', ''}


def bash_expands(*expressions: str) -> List[str]:
    """
    expand glob expressions which may also use bash brace expansion, for example ``calls.{a,b}.bedpe``

    Returns:
        the absolute paths of the matching files, in the order of the expressions

    Raises:
        FileNotFoundError: an expression did not match any file
    """
    result = []
    for expression in expressions:
        matches = [fname for pattern in braceexpand(expression) for fname in glob(pattern)]
        if not matches:
            raise FileNotFoundError('no files match the expression', expression)
        result.extend(matches)
    return [os.path.abspath(fname) for fname in result]


def filepath(path):
    """
    argparse type for an input file which must already exist
    """
    try:
        matches = bash_expands(path)
    except FileNotFoundError:
        raise TypeError('File does not exist', path)
    if len(matches) != 1:
        raise TypeError('expected a single file but the pattern matched several', path, matches)
    return matches[0]


class NullableType:
    """
    wrap a cast function so that the string none is cast to None
    """

    def __init__(self, callback_func):
        self.callback_func = callback_func

    def __call__(self, item):
        return None if str(item).lower() == 'none' else self.callback_func(item)


def cast_null(input_value):
    if str(input_value).lower() not in NULL_VALUES:
        raise TypeError('not a null value', input_value)
    return None


def cast(value, cast_func):
    """
    Example:
        >>> cast('no', bool)
        False
    """
    return cast_boolean(value) if cast_func == bool else cast_func(value)


def soft_cast(value, cast_type):
    """
    cast a value, falling back to None for the null placeholders (``.``, empty, none)

    Example:
        >>> soft_cast('.', int) is None
        True
    """
    try:
        return cast(value, cast_type)
    except (TypeError, ValueError):
        return cast_null(value)


def log_arguments(args):
    """
    log the parsed command line arguments, one per line
    """
    logger.info('arguments')
    for arg, val in sorted(vars(args).items()):
        if isinstance(val, list) and len(val) > 1:
            logger.info(f' {arg} = [')
            for item in val:
                logger.info(f'  {item!r}')
            logger.info(' ]')
        else:
            logger.info(f' {arg} = {val!r}')


def mkdirp(dirname):
    """
    create a directory and any missing parents, an existing directory is not an error
    """
    logger.info(f"creating output directory: '{dirname}'")
    os.makedirs(dirname, exist_ok=True)
    return dirname


def _read_bedpe_header(filename: str) -> Tuple[Optional[List[str]], int]:
    """
    Returns:
        the column names given by the last leading comment line (if any) and the number of leading
        comment, track and browser lines
    """
    header = None
    skip = 0
    with open(filename, 'r') as fh:
        for line in fh:
            if line.startswith('#'):
                header = line[1:].strip().split('\t')
            elif not line.startswith(('track', 'browser')):
                break
            skip += 1
    return header, skip


def read_bedpe(filename: str, placeholder_name: str = 'bedpe') -> BreakendStore:
    """
    reads a BEDPE file into a store of linked breakends. BEDPE coordinates are 0-based half-open and
    are converted to 1-based closed intervals. The score column is used as the breakend quality (QUAL)

    Args:
        filename: path to the BEDPE file
        placeholder_name: prefix used to name pairs without a usable name

    Returns:
        BreakendStore: two breakends per input row
    """
    logger.info(f'loading: {filename}')
    header, skip = _read_bedpe_header(filename)
    try:
        df = pd.read_csv(
            filename,
            sep='\t',
            header=None,
            dtype=str,
            keep_default_na=False,
            comment='#',
            skiprows=skip,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        logger.info(f'no breakpoints in: {filename}')
        return BreakendStore([])
    if df.shape[1] < 6:
        raise ValueError('BEDPE requires at least 6 columns', filename, df.shape[1])

    columns = BEDPE_COLUMNS[: df.shape[1]]
    for i in range(len(columns), df.shape[1]):
        if header is not None and len(header) == df.shape[1]:
            columns.append(header[i])
        else:
            columns.append(f'extra{i - len(BEDPE_COLUMNS) + 1}')
    df.columns = columns

    pairs = []
    for row_number, row in enumerate(df.to_dict('records'), start=1):
        for strand_column in ['strand1', 'strand2']:
            if row.get(strand_column, STRAND.POS) not in STRAND.values():
                raise ValueError(
                    f'invalid {strand_column} ({row[strand_column]}) for breakpoint {row_number} of {filename}, '
                    f'expected one of {STRAND.values()}'
                )
        data = {
            col: row[col] if row[col] not in {'', '.'} else None
            for col in columns[len(BEDPE_COLUMNS) :]
        }
        if 'score' in row:
            data[COLUMNS.quality] = soft_cast(row['score'], float)
        pairs.append(
            BreakpointPair(
                Breakend(row['chrom1'], int(row['start1']) + 1, int(row['end1']), row.get('strand1', '+')),
                Breakend(row['chrom2'], int(row['start2']) + 1, int(row['end2']), row.get('strand2', '+')),
                name=row.get('name'),
                data=data,
            )
        )
    store = BreakendStore.from_pairs(pairs, placeholder_name=placeholder_name)
    logger.info(f'loaded {len(store)} breakends from {len(pairs)} breakpoints')
    return store


def output_tabbed_file(rows: Union[pd.DataFrame, List[Dict]], filename: str, header=None):
    """
    write a tab-delimited output file, missing values are written as None
    """
    if isinstance(rows, pd.DataFrame):
        df = rows
    else:
        df = pd.DataFrame.from_records(rows, columns=header)
    if header is None:
        header = list(df.columns)
    logger.info(f'writing: {filename}')
    df = df.astype(object).where(df.notna(), 'None')
    df.to_csv(filename, columns=header, index=False, sep='\t')
