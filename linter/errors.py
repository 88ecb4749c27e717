"""Error taxonomy for the linting engine."""

from typing import Any


class LinterError(Exception):
    """Base class for linting errors."""
    pass


class InvalidFormatError(LinterError, ValueError):
    """Raised when a video format is not one of the recognized values."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Invalid format '{value}'. Must be one of: talking_head, gameplay, other, demo"
        )


class AnalyzerFailureError(LinterError):
    """Raised when the analysis capability fails, times out, or returns unusable output."""
    pass


class MalformedFindingError(LinterError):
    """Raised for a single analyzer finding that cannot be turned into a violation."""
    pass


class UnknownSeverityError(LinterError, ValueError):
    """Raised when a severity is outside critical/moderate/minor/ignored."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Unknown severity '{value}'")


class PreferenceValidationError(LinterError, ValueError):
    """Raised when a preference write carries invalid values."""
    pass
