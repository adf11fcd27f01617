"""Exceptions raised inside Repack Search and mapped to envelopes by the service."""


class RepackSearchError(Exception):
    """Base class for errors raised by Repack Search components."""

    status_code = 500


class QueryValidationError(RepackSearchError):
    """Raised when a search query is missing or blank."""

    status_code = 400


class BackendUnavailable(RepackSearchError):
    """Raised when the search index cannot be queried."""


class PersistenceFailure(RepackSearchError):
    """Raised when writing to or configuring the search index fails."""
