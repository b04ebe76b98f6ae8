from ..constants import WeakCompareNamespace

DEFAULTS = WeakCompareNamespace()
"""
- :term:`anchor_length`
- :term:`margin`
- :term:`match`
- :term:`mismatch`
- :term:`gap_opening`
- :term:`gap_extension`
"""
DEFAULTS.add('anchor_length', 300, defn='number of bases leading into the breakpoint to consider for homology')
DEFAULTS.add(
    'margin',
    5,
    defn='number of additional reference bases to include. This allows for inexact homology to be detected even '
    'in the presence of indels',
)
DEFAULTS.add('match', 2, defn='alignment score for a matching base')
DEFAULTS.add('mismatch', -6, defn='alignment score for a mismatched base')
DEFAULTS.add('gap_opening', 5, defn='alignment penalty for opening a gap')
DEFAULTS.add('gap_extension', 3, defn='alignment penalty for each base of a gap')
