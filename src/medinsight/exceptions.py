"""Exception hierarchy for medinsight."""


class MedInsightError(Exception):
    """Base exception for all medinsight errors."""


class InvalidInputError(MedInsightError):
    """Raised when a wrapping operation receives input of the wrong shape."""


class RecordsNotFoundError(MedInsightError):
    """Raised when no record matches the requested identifiers."""

    def __init__(self, message: str, record_ids: list[str] | None = None) -> None:
        super().__init__(message)
        self.record_ids = record_ids or []


class ConfigurationError(MedInsightError):
    """Raised when application settings are unusable at startup."""
