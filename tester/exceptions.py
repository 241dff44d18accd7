class TesterError(Exception):
    """base class for errors raised by the harness."""
    pass


class ExpectationError(TesterError, AssertionError):
    """an assertion did not hold."""
    pass


class UsageError(TesterError, TypeError):
    """an assertion was applied to a value it cannot check."""
    pass
