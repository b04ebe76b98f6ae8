"""
Sub-package Documentation
============================

This is the package responsible for matching breakpoints between two call sets (for example
a set of calls and a truth set) and counting how many subject breakpoints each query
breakpoint matches.

Output Files
--------------

+----------------------------+------------------+------------------------------------------------------------+
| expected name/suffix       | file type/format | content                                                    |
+============================+==================+============================================================+
| ``*.tab`` (overlap)        | text/tabbed      | one row per matching query/subject breakend pair           |
+----------------------------+------------------+------------------------------------------------------------+
| ``*.tab`` (count)          | text/tabbed      | one row per query breakend with the number of matches      |
+----------------------------+------------------+------------------------------------------------------------+


Algorithm Overview
---------------------

- overlap join of the query and subject breakends (expanded by the maximum gap)
- the partner of each hit is looked up rather than recomputing the join on the partner breakends
- a breakpoint matches when the breakend hit and the partner hit agree. The hits are sorted and
  adjacent equal records are kept, avoiding a full duplicate marking of the hit set
- filter matches on the difference in event size and on breakend position error relative to the event size
- optionally assign each subject breakpoint only to its highest scoring query breakpoint when counting
"""
