from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from svcompare.breakpoint import Breakend, BreakendStore, BreakpointPair
from svcompare.sequence import ReferenceGenomeSource


def breakpoint(chr1, start1, strand1, chr2, start2, strand2, end1=None, end2=None, name=None, **data):
    """
    build a paired interval, coordinates are 1-based
    """
    return BreakpointPair(
        Breakend(chr1, start1, end1, strand1), Breakend(chr2, start2, end2, strand2), name=name, data=data
    )


def breakpoint_store(*pairs):
    return BreakendStore.from_pairs(pairs)


def mock_reference(**contigs):
    """
    in-memory reference genome sequence source
    """
    return ReferenceGenomeSource(
        {name: SeqRecord(Seq(seq), id=name, name=name) for name, seq in contigs.items()}
    )
