import os
from typing import Dict, List

from ..pairing.main import breakend_table
from ..sequence import FastaFileSource, ReferenceGenomeSource, load_reference_genome
from ..util import logger, mkdirp, output_tabbed_file, read_bedpe
from .homology import HOMOLOGY_COLUMNS, calculate_reference_homology


def open_reference(reference_genome: List[str]):
    """
    Returns:
        a sequence source for the reference genome. A single indexed fasta is read through its index,
        anything else is loaded into memory
    """
    if len(reference_genome) == 1 and os.path.exists(reference_genome[0] + '.fai'):
        logger.info(f'reading indexed reference: {reference_genome[0]}')
        return FastaFileSource(reference_genome[0])
    logger.info(f'loading reference: {", ".join(reference_genome)}')
    return ReferenceGenomeSource(load_reference_genome(*reference_genome))


def main(
    inputs: str,
    reference_genome: List[str],
    output: str,
    config: Dict,
):
    """
    Args:
        inputs: path to the input BEDPE file
        reference_genome: paths to the reference genome fasta file(s)
        output: path to the output file
        config: the flattened run configuration
    """
    store = read_bedpe(inputs, placeholder_name=config['pairing.placeholder_name'])
    reference = open_reference(reference_genome)
    try:
        homology = calculate_reference_homology(
            store,
            reference,
            anchor_length=config['homology.anchor_length'],
            margin=config['homology.margin'],
            match=config['homology.match'],
            mismatch=config['homology.mismatch'],
            gap_opening=config['homology.gap_opening'],
            gap_extension=config['homology.gap_extension'],
        )
    finally:
        if isinstance(reference, FastaFileSource):
            reference.close()

    rows = breakend_table(store)
    for column in HOMOLOGY_COLUMNS:
        rows[column] = homology[column].to_numpy()
    logger.info(
        f'{int(homology[HOMOLOGY_COLUMNS[0]].notna().sum())} of {len(store)} breakends have a homology length'
    )
    if os.path.dirname(output):
        mkdirp(os.path.dirname(output))
    output_tabbed_file(rows, output)
