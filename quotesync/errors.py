from __future__ import annotations


class QuoteSyncError(Exception):
    """Base class for quotesync errors."""


class ValidationError(QuoteSyncError, ValueError):
    """A quote or an import document failed validation."""


class DecodeError(ValidationError):
    """A JSON document (import file or persisted value) could not be parsed."""


class TransportError(QuoteSyncError):
    """The remote source could not be reached or answered with an error."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
