import itertools
import math
from copy import copy as _copy
from typing import Dict, Iterable, Iterator, List, Optional

import numpy as np

from .constants import COLUMNS, CONSTRICT_POSITION, STRAND
from .error import BrokenPartnerInvariant, UnsupportedConstrictionMode
from .interval import Interval


class Breakend(Interval):
    """
    class for storing information about one side of a SV breakpoint.
    coordinates are given as 1-indexed. Before constriction the interval is the supporting
    (confidence) interval of the breakend call, afterwards it is a single base
    """

    chr: str
    strand: str
    name: Optional[str]
    partner: Optional[str]
    insertion_length: Optional[int]
    sv_length: Optional[int]
    quality: Optional[float]
    untemplated_seq: Optional[str]
    data: Dict

    @property
    def key(self):
        return (self.chr, self.start, self.end, self.strand)

    def __init__(
        self,
        chr: str,
        start: int,
        end: Optional[int] = None,
        strand: str = STRAND.POS,
        name: Optional[str] = None,
        partner: Optional[str] = None,
        insertion_length: Optional[int] = None,
        sv_length: Optional[int] = None,
        quality: Optional[float] = None,
        untemplated_seq: Optional[str] = None,
        data: Optional[Dict] = None,
    ):
        """
        Args:
            chr: the chromosome/contig
            start: the genomic position of the breakend
            end: if the breakend is uncertain (a range) then specify the end of the range here
            strand (STRAND): direction the breakend is traversed into the breakpoint
            name: unique id of the breakend
            partner: id of the other breakend of the same breakpoint
            insertion_length: number of untemplated bases at the junction
            sv_length: nominal (signed) size of the event
            quality: score used to pick the best match
            untemplated_seq: untemplated bases at the junction wrt the forward reference strand

        Examples:
            >>> Breakend('1', 100, strand='+', name='a_1', partner='a_2')
            >>> Breakend('1', 100, 120, '-')
        """
        Interval.__init__(self, start, end)
        self.chr = str(chr)
        self.strand = STRAND.enforce(strand)
        self.name = name
        self.partner = partner
        self.insertion_length = insertion_length
        self.sv_length = sv_length
        self.quality = quality
        self.untemplated_seq = untemplated_seq
        self.data = {}
        if data is not None:
            self.data.update(data)

    def __repr__(self):
        return 'Breakend({}{}:{}{}{})'.format(
            '' if self.name is None else self.name + '=',
            self.chr,
            self.start,
            '-' + str(self.end) if self.end != self.start else '',
            self.strand,
        )

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key == other.key and self.name == getattr(other, 'name', None)

    def __hash__(self):
        return hash((self.key, self.name))

    @property
    def is_reverse(self) -> bool:
        return self.strand == STRAND.NEG

    def get(self, column: str, default=None):
        """
        get a breakend attribute by its column name

        Example:
            >>> Breakend('1', 1, quality=5).get('QUAL')
            5
        """
        attributes = {
            COLUMNS.quality: self.quality,
            COLUMNS.insertion_length: self.insertion_length,
            COLUMNS.sv_length: self.sv_length,
            COLUMNS.untemplated_seq: self.untemplated_seq,
        }
        if column in attributes:
            return attributes[column] if attributes[column] is not None else default
        return self.data.get(column, default)

    def flatten(self) -> Dict:
        """
        returns the key-value information for the breakend as can be written directly as a tab row
        """
        row = {}
        row.update(self.data)
        row.update(
            {
                COLUMNS.breakend_id: self.name,
                COLUMNS.partner: self.partner,
                COLUMNS.chromosome: self.chr,
                COLUMNS.start: self.start,
                COLUMNS.end: self.end,
                COLUMNS.strand: self.strand,
                COLUMNS.quality: self.quality,
                COLUMNS.insertion_length: self.insertion_length,
                COLUMNS.sv_length: self.sv_length,
                COLUMNS.untemplated_seq: self.untemplated_seq,
            }
        )
        return row


class BreakpointPair:
    """
    a pair of breakend intervals as given by paired-interval (BEDPE-like) input. Not yet named
    or linked to one another, see :meth:`BreakendStore.from_pairs`
    """

    break1: Breakend
    break2: Breakend
    name: Optional[str]
    data: Dict

    def __init__(
        self, b1: Breakend, b2: Breakend, name: Optional[str] = None, data: Optional[Dict] = None, **kwargs
    ):
        """
        Args:
            b1: the first breakend
            b2: the second breakend
            name: the name of the breakpoint, used to build the breakend ids
            data: optional dictionary of attributes associated with this pair

        Example:
            >>> BreakpointPair(Breakend('1', 100, strand='+'), Breakend('1', 200, strand='-'), name='del1')
        """
        self.break1 = b1
        self.break2 = b2
        self.name = name
        self.data = {}
        if data is not None:
            self.data.update(data)
            conflicts = set(data.keys()) & set(kwargs.keys())
            if conflicts:
                raise TypeError('data got multiple values for data elements:', conflicts)
        self.data.update(kwargs)


def _is_placeholder_name(name) -> bool:
    if name is None:
        return True
    try:
        if math.isnan(name):
            return True
    except TypeError:
        pass
    return str(name) in {'', '.'}


def _optional_value(value, cast_type):
    if value is None:
        return None
    try:
        if math.isnan(value):
            return None
    except TypeError:
        pass
    if cast_type is int:
        # pandas reads integer columns with missing values as floats, ex. 100.0
        return int(float(value))
    return cast_type(value)


class BreakendStore:
    """
    ordered collection of breakends which owns them and resolves the partner relation. The
    partner of every breakend must be another breakend of the same store that points back at it

    Breakends are referred to by their integer index (position) in the store
    """

    def __init__(self, breakends: Iterable[Breakend]):
        self._breakends: List[Breakend] = list(breakends)
        self._index_by_name: Dict[str, int] = {}
        for index, breakend in enumerate(self._breakends):
            if breakend.name in self._index_by_name:
                raise KeyError('duplicate breakend id', breakend.name)
            self._index_by_name[breakend.name] = index

        partners = np.zeros(len(self._breakends), dtype=np.int64)
        for index, breakend in enumerate(self._breakends):
            try:
                partner_index = self._index_by_name[breakend.partner]
            except KeyError:
                raise BrokenPartnerInvariant(
                    f'partner ({breakend.partner}) of breakend ({breakend.name}) is missing'
                )
            if partner_index == index:
                raise BrokenPartnerInvariant(f'breakend ({breakend.name}) is its own partner')
            if self._breakends[partner_index].partner != breakend.name:
                raise BrokenPartnerInvariant(
                    f'partner ({breakend.partner}) of breakend ({breakend.name}) does not reference it back'
                )
            partners[index] = partner_index
        self.partner_indices = partners

        self.chrs = np.array([b.chr for b in self._breakends], dtype=object)
        self.starts = np.array([b.start for b in self._breakends], dtype=np.int64)
        self.ends = np.array([b.end for b in self._breakends], dtype=np.int64)
        self.reverse = np.array([b.is_reverse for b in self._breakends], dtype=bool)

    def __len__(self) -> int:
        return len(self._breakends)

    def __getitem__(self, index: int) -> Breakend:
        return self._breakends[index]

    def __iter__(self) -> Iterator[Breakend]:
        return iter(self._breakends)

    def __repr__(self):
        return '{}(n={})'.format(self.__class__.__name__, len(self))

    def index(self, name: str) -> int:
        """
        Returns:
            the position of the breakend with the given id
        """
        return self._index_by_name[name]

    def partner(self, index: int) -> int:
        """
        Returns:
            the position of the partner of the breakend at the given position
        """
        return int(self.partner_indices[index])

    def partner_breakend(self, index: int) -> Breakend:
        return self._breakends[self.partner(index)]

    def names(self) -> List[str]:
        return [b.name for b in self._breakends]

    def column(self, column: str, default=None) -> list:
        """
        the values of a given attribute for every breakend, in store order
        """
        return [b.get(column, default) for b in self._breakends]

    def insertion_lengths(self) -> np.ndarray:
        """
        insertion lengths, treating absent values as 0
        """
        return np.array(
            [b.insertion_length if b.insertion_length is not None else 0 for b in self._breakends],
            dtype=np.int64,
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[BreakpointPair], placeholder_name: str = 'bedpe') -> 'BreakendStore':
        """
        Builds the breakends for a set of paired intervals. The first breakend of each pair is
        named ``<name>_1`` and the second ``<name>_2``. All first breakends are stored before all
        second breakends

        Args:
            pairs: the paired intervals
            placeholder_name: prefix used for pairs without a usable (present and unique) name

        Returns:
            BreakendStore: the linked breakends
        """
        pairs = list(pairs)
        # real names are reserved first so that a generated name never takes one
        names: List[Optional[str]] = []
        used = set()
        for pair in pairs:
            if _is_placeholder_name(pair.name) or str(pair.name) in used:
                names.append(None)
            else:
                names.append(str(pair.name))
                used.add(names[-1])

        spare_ordinals = itertools.count(len(pairs) + 1)
        for ordinal, name in enumerate(names, start=1):
            if name is not None:
                continue
            name = f'{placeholder_name}{ordinal}'
            while name in used:
                name = f'{placeholder_name}{next(spare_ordinals)}'
            used.add(name)
            names[ordinal - 1] = name

        firsts = []
        seconds = []
        for name, pair in zip(names, pairs):
            for suffix, partner_suffix, breakend, result in [
                ('_1', '_2', pair.break1, firsts),
                ('_2', '_1', pair.break2, seconds),
            ]:
                data = {k: v for k, v in pair.data.items() if k != COLUMNS.name}
                result.append(
                    Breakend(
                        breakend.chr,
                        breakend.start,
                        breakend.end,
                        strand=breakend.strand,
                        name=name + suffix,
                        partner=name + partner_suffix,
                        insertion_length=_optional_value(
                            data.pop(COLUMNS.insertion_length, breakend.insertion_length), int
                        ),
                        sv_length=_optional_value(data.pop(COLUMNS.sv_length, breakend.sv_length), int),
                        quality=_optional_value(data.pop(COLUMNS.quality, breakend.quality), float),
                        untemplated_seq=_optional_value(
                            data.pop(COLUMNS.untemplated_seq, breakend.untemplated_seq), str
                        ),
                        data=data,
                    )
                )
        return cls(firsts + seconds)

    def constrict(
        self, reference_lengths: Optional[Dict[str, int]] = None, position: str = CONSTRICT_POSITION.MIDDLE
    ) -> 'BreakendStore':
        """
        collapse the interval of each breakend to a single representative base. The midpoint
        is rounded down when the breakend lies before its partner or is on the reverse strand,
        and rounded up otherwise, so that the two sides of an event never collapse onto one another

        ::

             123 456
             =>   <=     + -    rounded: f f
             >   <==
             =>  =>      + +    rounded: f c
             >   ==>

        Args:
            reference_lengths: contig lengths, when given positions are clamped to the contig
            position: the position policy

        Returns:
            BreakendStore: a new store with single base breakends

        Raises:
            UnsupportedConstrictionMode: for an unrecognised position policy
        """
        if position != CONSTRICT_POSITION.MIDDLE:
            raise UnsupportedConstrictionMode(f'Unrecognised position {position}')
        constricted = []
        for index, breakend in enumerate(self._breakends):
            round_down = breakend.start < self.starts[self.partner_indices[index]] or breakend.is_reverse
            middle = (breakend.start + breakend.end) / 2
            pos = math.floor(middle) if round_down else math.ceil(middle)
            if reference_lengths is not None:
                pos = max(1, pos)
                if breakend.chr in reference_lengths:
                    pos = min(pos, reference_lengths[breakend.chr])
            temp = _copy(breakend)
            temp.data = dict(breakend.data)
            temp.start = pos
            temp.end = pos
            constricted.append(temp)
        return self.__class__(constricted)
