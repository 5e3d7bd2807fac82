"""Custom exception classes for the application."""

from typing import Any, Optional


class TasteBuddyException(Exception):
    """Base exception for all TasteBuddy errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class DistributorError(TasteBuddyException):
    """Base for failures that abort a whole distributor call."""

    def __init__(self, message: str, distributor: Optional[str] = None):
        self.distributor = distributor
        if distributor:
            message = f"{distributor}: {message}"
        super().__init__(message)


class TransportError(DistributorError):
    """Raised when a distributor endpoint cannot be reached or answers non-2xx."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        if status_code is not None:
            detail = f"GET {url} failed with status {status_code}: {message}"
        else:
            detail = f"GET {url} failed: {message}"
        super().__init__(detail)


class DecodeError(DistributorError):
    """Raised when a response does not have the distributor's expected shape."""

    def __init__(self, distributor: str, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: could not decode response: {message}", distributor)


class FieldParseError(TasteBuddyException):
    """A single scalar field could not be parsed.

    Adapters construct this to log it and substitute a default. It never
    escapes an adapter call.
    """

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        super().__init__(f"Could not parse {field}={value!r}: {message}")


class UnknownDistributorError(DistributorError):
    """Raised when no adapter is registered under a distributor key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No adapter registered for distributor '{key}'")
