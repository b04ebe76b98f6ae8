"""
module responsible for small utility functions and constants used throughout the svcompare package
"""
import os
import re

from Bio.Seq import Seq

PROGNAME = 'svcompare'

UNKNOWN_BASE = 'N'
"""the base used to pad sequence requested outside the bounds of a contig"""


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class CompareNamespace:
    """
    Read-only style container for a group of named constants or settings. Each member may carry a
    definition (shown in the help menus), the type used to cast it from strings and whether None
    is an allowed value

    Example:
        >>> nspace = CompareNamespace(max_gap=0, ignore_strand=False)
        >>> nspace.max_gap
        0
        >>> nspace['ignore_strand']
        False
    """

    env_override = False

    def __init__(self, **kwargs):
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_casts', {})
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_nullable', set())
        for name, value in kwargs.items():
            self.add(name, value)

    def __repr__(self):
        members = ', '.join(sorted(f'{name}={value!r}' for name, value in self.items()))
        return f'{self.__class__.__name__}({members})'

    def get_env_name(self, attr: str) -> str:
        """
        Example:
            >>> CompareNamespace(max_gap=0).get_env_name('max_gap')
            'SVCOMPARE_MAX_GAP'
        """
        return f'{PROGNAME}_{attr}'.upper()

    def _from_env(self, attr: str):
        """
        Raises:
            KeyError: the environment variable is not set
        """
        raw = os.environ[self.get_env_name(attr)].strip()
        if attr in self._nullable and raw.lower() == 'none':
            return None
        return self.type(attr, str)(raw)

    def __getattr__(self, attr):
        # only called when normal attribute lookup fails
        members = object.__getattribute__(self, '_members')
        if attr not in members:
            raise AttributeError(f'{self.__class__.__name__} has no member {attr!r}')
        if self.env_override:
            try:
                return self._from_env(attr)
            except KeyError:
                pass
        return members[attr]

    def __getitem__(self, key):
        return getattr(self, key)

    def __setattr__(self, attr, val):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        self._members[attr] = val

    __setitem__ = __setattr__

    def __contains__(self, attr):
        return attr in self._members

    def __iter__(self):
        return iter(self.keys())

    def keys(self):
        return list(self._members)

    def values(self):
        return [self[name] for name in self._members]

    def items(self):
        return [(name, self[name]) for name in self._members]

    def enforce(self, value):
        """
        Returns:
            the value when it is one of the members of the namespace

        Raises:
            KeyError: the value is not a member value

        Example:
            >>> STRAND.enforce('-')
            '-'
        """
        allowed = self.values()
        if value not in allowed:
            raise KeyError(f'{value!r} is not one of the allowed values', allowed)
        return value

    def is_nullable(self, attr: str) -> bool:
        return attr in self._nullable

    def type(self, attr: str, *default):
        """
        the function used to cast string input (command line, environment, config file) for a member
        """
        if attr in self._casts or not default:
            return self._casts[attr]
        return default[0]

    def define(self, attr: str, *default):
        if attr in self._defns or not default:
            return self._defns[attr]
        return default[0]

    def add(self, attr: str, value, defn: str = None, cast_type=None, nullable: bool = False):
        """
        Add a member to the namespace

        Args:
            attr: name of the member
            value: the (default) value
            defn: the definition, used in the help menus
            cast_type: function used to cast string input, defaults to the type of the value
            nullable: None is allowed as a value
        """
        cast_type = cast_type or type(value)
        self._casts[attr] = cast_boolean if cast_type == bool else cast_type
        if defn:
            self._defns[attr] = defn
        if nullable:
            self._nullable.add(attr)
        self[attr] = value


class WeakCompareNamespace(CompareNamespace):
    """
    namespace of defaults, any of which may be overridden by setting the environment variable
    ``SVCOMPARE_<NAME>``
    """

    env_override = True


STRAND = CompareNamespace(POS='+', NEG='-')
"""
holds controlled vocabulary for allowed strand values

- ``POS``: the breakend is traversed into the breakpoint left-to-right (forward)
- ``NEG``: the breakend is traversed into the breakpoint right-to-left (reverse)
"""

SUBCOMMAND = CompareNamespace(OVERLAP='overlap', COUNT='count', HOMOLOGY='homology')

CONSTRICT_POSITION = CompareNamespace(MIDDLE='middle')

COLUMNS = CompareNamespace(
    name='name',
    score='score',
    quality='QUAL',
    insertion_length='insLen',
    sv_length='svLen',
    untemplated_seq='insSeq',
    breakend_id='id',
    partner='partner',
    chromosome='chr',
    start='start',
    end='end',
    strand='strand',
    query_hits='query_hits',
    subject_hits='subject_hits',
    query_id='query_id',
    subject_id='subject_id',
    size_error='sizeerror',
    local_breakpoint_error='localbperror',
    remote_breakpoint_error='remotebperror',
    overlap_count='overlap_count',
    exact_homology_length='exacthomlen',
    inexact_homology_length='inexacthomlen',
    inexact_homology_score='inexactscore',
)


def reverse_complement(s: str) -> str:
    """
    wrapper for the Bio.Seq reverse_complement method

    Args:
        s: the input DNA sequence

    Returns:
        str: the reverse complement of the input sequence

    Example:
        >>> reverse_complement('ATCCGGT')
        'ACCGGAT'
        >>> reverse_complement('NNAC')
        'GTNN'
    """
    input_string = str(s)
    if not re.match('^[A-Za-z]*$', input_string):
        raise ValueError('unexpected sequence format. cannot reverse complement', input_string)
    return str(Seq(input_string).reverse_complement())
