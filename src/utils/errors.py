"""
Exception hierarchy for RatingViews.

Every failure here is fatal for the run; recovery is a full rerun.
"""


class RatingViewsError(Exception):
    """Base class for all pipeline errors."""


class InputValidationError(RatingViewsError, ValueError):
    """Input records cannot be aggregated as given."""


class InvalidTimestampError(InputValidationError):
    """A rating timestamp does not map to a calendar date."""

    def __init__(self, timestamp, reason: str = ""):
        self.timestamp = timestamp
        message = f"Invalid rating timestamp: {timestamp!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class RecordStoreError(RatingViewsError):
    """Reading from or writing to the record store failed."""
