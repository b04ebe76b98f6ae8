from ..constants import COLUMNS, WeakCompareNamespace
from ..util import NullableType

DEFAULTS = WeakCompareNamespace()
"""
- :term:`max_gap`
- :term:`min_overlap`
- :term:`ignore_strand`
- :term:`size_margin`
- :term:`restrict_margin_to_size_multiple`
- :term:`count_only_best`
- :term:`score_column`
- :term:`placeholder_name`
"""
DEFAULTS.add(
    'max_gap', 0, defn='the maximum distance between breakends which are still considered to overlap'
)
DEFAULTS.add(
    'min_overlap', 1, defn='the minimum number of bases breakends (expanded by max_gap) must share to overlap'
)
DEFAULTS.add(
    'ignore_strand', False, defn='match breakends regardless of their strand'
)
DEFAULTS.add(
    'size_margin',
    0.25,
    cast_type=NullableType(float),
    nullable=True,
    defn='error margin in allowable event size, as a fraction of the smaller event. Prevents matching of events '
    'of different sizes such as a 200bp event matching a 1bp event when max_gap is set to 200. Set to None to '
    'disable size and position filtering',
)
DEFAULTS.add(
    'restrict_margin_to_size_multiple',
    0.5,
    cast_type=NullableType(float),
    nullable=True,
    defn='breakend positions may be off by at most this multiple of the (smaller) event size. The default of 0.5 '
    'ensures that small deletions actually overlap by at least one base',
)
DEFAULTS.add(
    'count_only_best',
    False,
    defn='count each subject breakpoint as overlapping only the best (highest scoring) overlapping query breakpoint',
)
DEFAULTS.add(
    'score_column',
    COLUMNS.quality,
    defn='query breakend column defining the score used to pick the best query breakpoint',
)
DEFAULTS.add('placeholder_name', 'bedpe', defn='prefix used to name input breakpoints which are not uniquely named')
