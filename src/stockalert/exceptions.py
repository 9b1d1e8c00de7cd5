"""Stock alert exception hierarchy.

All package-specific exceptions derive from :class:`StockAlertError` so callers
can catch every failure of a quote, tick or search request uniformly.
"""

from __future__ import annotations


class StockAlertError(Exception):
    """Base class for stock alert exceptions.

    Derived exceptions should extend this class so that callers can catch all
    package-specific errors uniformly.
    """


class ConfigError(StockAlertError):
    """Raised when configuration files or parameters are invalid."""


class DataValidationError(StockAlertError):
    """Raised when request parameters fail validation.

    Named DataValidationError to avoid conflict with pydantic's ValidationError.
    """


class DataSourceError(StockAlertError):
    """Raised when accessing or processing a remote data source fails."""


class TransportError(DataSourceError):
    """Raised when a retrieval could not complete (refused, timeout, DNS)."""


class StatusError(DataSourceError):
    """Raised when the remote source answers with a non-success status.

    :param status_code: HTTP status code returned by the source.
    :param reason: Reason phrase returned alongside the status code.
    """

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"status code error: {status_code} {reason}".rstrip())


class DecodeError(DataSourceError):
    """Raised when a payload or a packed timestamp cannot be parsed."""


__all__ = [
    "StockAlertError",
    "ConfigError",
    "DataValidationError",
    "DataSourceError",
    "TransportError",
    "StatusError",
    "DecodeError",
]
