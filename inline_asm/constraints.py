"""Operand constraint classification.

Only the leading read/write marker is inspected here; the rest of the
constraint text is passed through untouched.
"""

OUTPUT_LACKS_WRITE = "output operand constraint lacks '=' or '+'"


def normalize_output(constraint):
    """Classify an output constraint.

    Returns ``(stored_constraint, read_write, error)``.  ``"=r"`` is stored
    as-is; ``"+r"`` is stored as ``"=r"`` with ``read_write`` set, since the
    ``+`` form names an operand that is both read and written.  Anything
    else is kept unchanged and paired with an error message.
    """
    if constraint.startswith('='):
        return constraint, False, None
    if constraint.startswith('+'):
        return '=' + constraint[1:], True, None
    return constraint, False, OUTPUT_LACKS_WRITE


def check_input(constraint):
    """Return an error message if an input constraint carries a write marker."""
    if constraint.startswith('='):
        return "input operand constraint contains '='"
    if constraint.startswith('+'):
        return "input operand constraint contains '+'"
    return None
