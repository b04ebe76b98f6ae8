class BrokenPartnerInvariant(Exception):
    """
    raised when a breakend references a partner which is missing from the store, is itself,
    or does not reference it back
    """

    pass


class UnsupportedConstrictionMode(Exception):
    """
    raised when a breakend interval is collapsed using an unrecognised position policy
    """

    pass


class DegenerateAlignmentInput(UserWarning):
    """
    warned when every sequence given to the homology alignment is empty. The homology
    results are null rather than computed
    """

    pass
