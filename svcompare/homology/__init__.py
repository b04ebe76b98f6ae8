"""
Sub-package Documentation
============================

This is the package responsible for scoring the sequence homology at each breakpoint against the
reference genome. Breakpoints with long homology may be alignment artefacts and their exact position
is ambiguous.

Output Files
--------------

+----------------------------+------------------+------------------------------------------------------------+
| expected name/suffix       | file type/format | content                                                    |
+============================+==================+============================================================+
| ``*.tab``                  | text/tabbed      | breakend columns plus exacthomlen, inexacthomlen and       |
|                            |                  | inexactscore                                               |
+----------------------------+------------------+------------------------------------------------------------+


Algorithm Overview
---------------------

- the anchor (reference bases leading into the breakpoint) is shortened for small events and at contig ends
- the breakpoint sequence (anchor, untemplated sequence, partner side) is aligned to the reference continuing
  past the breakpoint
- the homology of a breakpoint is the aligned length past the anchor, summed over both breakends
"""
