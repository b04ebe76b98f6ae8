"""
reference sequence access and extraction of the sequence around breakends
"""
from typing import Dict, List, Sequence, Union

import numpy as np
import pysam
from Bio import SeqIO
from Bio.SeqRecord import SeqRecord

from .breakpoint import Breakend, BreakendStore
from .constants import STRAND, UNKNOWN_BASE, reverse_complement
from .util import logger

ReferenceGenome = Dict[str, SeqRecord]


class ReferenceGenomeSource:
    """
    sequence source backed by an in-memory reference genome (dictionary of sequence records by contig name)
    """

    def __init__(self, reference_genome: ReferenceGenome):
        self.reference_genome = reference_genome

    def fetch(self, contig: str, start: int, end: int) -> str:
        """
        Args:
            contig: the contig name
            start: the first base (1-based, inclusive)
            end: the last base (1-based, inclusive)
        """
        return str(self.reference_genome[contig].seq[start - 1 : end]).upper()

    def contig_length(self, contig: str) -> int:
        return len(self.reference_genome[contig].seq)

    def contig_lengths(self) -> Dict[str, int]:
        return {contig: len(record.seq) for contig, record in self.reference_genome.items()}


class FastaFileSource:
    """
    sequence source backed by an indexed fasta file
    """

    def __init__(self, filename: str):
        self.filename = filename
        self.fasta = pysam.FastaFile(filename)

    def fetch(self, contig: str, start: int, end: int) -> str:
        return self.fasta.fetch(contig, start - 1, end).upper()

    def contig_length(self, contig: str) -> int:
        try:
            return self.fasta.get_reference_length(contig)
        except ValueError:
            raise KeyError('contig not found in the reference', contig, self.filename)

    def contig_lengths(self) -> Dict[str, int]:
        return dict(zip(self.fasta.references, self.fasta.lengths))

    def close(self):
        self.fasta.close()

    def __enter__(self):
        return self

    def __exit__(self, *pos):
        self.close()


def load_reference_genome(*filepaths: str) -> ReferenceGenome:
    """
    Args:
        filepaths: the paths to the files containing the input fasta genomes

    Returns:
        a dictionary representing the sequences in the fasta file
    """
    reference_genome = {}
    for filename in filepaths:
        with open(filename, 'r') as fh:
            for chrom, seq in SeqIO.to_dict(SeqIO.parse(fh, 'fasta')).items():
                if chrom in reference_genome:
                    raise KeyError('Duplicate chromosome name', chrom, filename)
                reference_genome[chrom] = seq.upper()
    return reference_genome


def reference_sequence(breakend: Breakend, reference, anchored_bases: int, following_bases: int) -> str:
    """
    Returns the reference sequence around a single base breakend, as traversed from the anchor bases into
    the breakpoint. For reverse (-) breakends this is the reverse complement of the reference bases

    Bases outside of the contig are given as the unknown base so that the result always has
    anchored_bases + following_bases characters

    Args:
        breakend: the (constricted) breakend
        reference: the sequence source
        anchored_bases: number of bases leading into the breakpoint
        following_bases: number of reference bases past the breakpoint
    """
    length = anchored_bases + following_bases
    if breakend.strand == STRAND.NEG:
        start = breakend.start - following_bases
        end = breakend.end + anchored_bases - 1
    else:
        start = breakend.start - anchored_bases + 1
        end = breakend.end + following_bases
    try:
        contig_length = reference.contig_length(breakend.chr)
    except KeyError:
        logger.warning(f'contig ({breakend.chr}) of breakend ({breakend.name}) is not in the reference')
        contig_length = 0

    fetch_start = max(1, start)
    fetch_end = min(contig_length, end)
    seq = reference.fetch(breakend.chr, fetch_start, fetch_end) if fetch_start <= fetch_end else ''
    start_pad = min(length, max(0, 1 - start))
    end_pad = length - start_pad - len(seq)
    seq = UNKNOWN_BASE * start_pad + seq + UNKNOWN_BASE * end_pad
    if breakend.strand == STRAND.NEG:
        seq = reverse_complement(seq)
    return seq


def breakpoint_sequence(
    breakend: Breakend, partner: Breakend, reference, anchored_bases: int, remote_bases: int
) -> str:
    """
    the sequence traversed from the anchor bases of a (constricted) breakend, through the untemplated
    sequence, and away from the breakpoint along its partner
    """
    local_seq = reference_sequence(breakend, reference, anchored_bases, 0)
    untemplated_seq = breakend.untemplated_seq or ''
    if breakend.strand == STRAND.NEG:
        untemplated_seq = reverse_complement(untemplated_seq)
    remote_seq = reverse_complement(reference_sequence(partner, reference, remote_bases, 0))
    return local_seq + untemplated_seq + remote_seq


def _per_breakend(value: Union[int, Sequence[int]], size: int) -> List[int]:
    if np.ndim(value) == 0:
        return [int(value)] * size
    value = [int(v) for v in value]
    if len(value) != size:
        raise ValueError('expected a value per breakend', len(value), size)
    return value


def extract_reference_sequence(
    store: BreakendStore,
    reference,
    anchored_bases: Union[int, Sequence[int]],
    following_bases: Union[int, Sequence[int], None] = None,
) -> List[str]:
    """
    Returns the reference sequence around each breakpoint position. The breakends are first
    constricted to a single base (see :meth:`~svcompare.breakpoint.BreakendStore.constrict`)

    Args:
        store: the breakends
        reference: the sequence source
        anchored_bases: number of bases leading into the breakpoint to extract
        following_bases: number of reference bases past the breakpoint to extract, defaults to anchored_bases
    """
    if following_bases is None:
        following_bases = anchored_bases
    anchored_bases = _per_breakend(anchored_bases, len(store))
    following_bases = _per_breakend(following_bases, len(store))
    constricted = store.constrict()
    return [
        reference_sequence(breakend, reference, anchored, following)
        for breakend, anchored, following in zip(constricted, anchored_bases, following_bases)
    ]


def extract_breakpoint_sequence(
    store: BreakendStore,
    reference,
    anchored_bases: Union[int, Sequence[int]],
    remote_bases: Union[int, Sequence[int], None] = None,
) -> List[str]:
    """
    Extracts the breakpoint sequence: the anchor bases leading into the breakpoint, the untemplated
    sequence and then the bases leading away from the breakpoint on the partner side

    For reverse (-) breakends this corresponds to the reverse complement of the reference sequence bases

    Args:
        store: the breakends
        reference: the sequence source
        anchored_bases: number of bases leading into the breakpoint to extract
        remote_bases: number of bases from the other side of the breakpoint to extract, defaults to anchored_bases
    """
    if remote_bases is None:
        remote_bases = anchored_bases
    anchored_bases = _per_breakend(anchored_bases, len(store))
    remote_bases = _per_breakend(remote_bases, len(store))
    constricted = store.constrict()
    return [
        breakpoint_sequence(
            breakend, constricted.partner_breakend(index), reference, anchored_bases[index], remote_bases[index]
        )
        for index, breakend in enumerate(constricted)
    ]
