class ProgressionError(Exception):
    """Base class for errors raised by the progression core."""


class InvalidPerformanceData(ProgressionError):
    """Submitted rounds are malformed: duplicated, missing, or out of range."""


class InvalidWeight(ProgressionError):
    """A weight is negative or not a finite number."""


class NotEligibleForIncrease(ProgressionError):
    """A weight increase was confirmed for an exercise whose target was not reached."""


class PerformanceNotFound(ProgressionError):
    pass


class PreviousSessionLookupFailed(ProgressionError):
    """The store could not load earlier performance; the cause is chained."""
