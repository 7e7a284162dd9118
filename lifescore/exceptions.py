"""
Exceptions raised by the scoring core.

Only caller bugs raise. Expected data conditions (no active good habits,
too few samples for a correlation) degrade to values or flags instead.
"""


class LifeScoreError(Exception):
    """Base exception for the scoring core"""
    pass


class LogNotFoundError(LifeScoreError, LookupError):
    """Raised when a date is missing from the supplied log history"""
    def __init__(self, date):
        self.date = date
        super().__init__(f"Daily log for {date} not found in history")


class UnknownVariantError(LifeScoreError, ValueError):
    """Raised when an exhaustive dispatch meets an enum member it does not handle"""
    def __init__(self, kind: str, value):
        self.kind = kind
        self.value = value
        super().__init__(f"Unhandled {kind}: {value!r}")
