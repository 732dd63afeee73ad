"""
xdiff Exception Hierarchy

Defines the exceptions raised by the request and comparison engine.
"""

from typing import Any, Dict, Optional


class XDiffException(Exception):
    """Base exception for all xdiff errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class InvalidOverride(XDiffException):
    """Malformed `key=value` override token."""

    pass


class ProfileNotFound(XDiffException):
    """Named profile is absent from the loaded document."""

    pass


class ValidationError(XDiffException):
    """Profile content has the wrong shape (params/body not an object)."""

    pass


class UnsupportedContentType(XDiffException):
    """Negotiated content type has no body encoder."""

    pass


class MalformedBody(XDiffException):
    """Response claims to be JSON but does not parse."""

    pass


class NetworkError(XDiffException):
    """Transport-level failure (connection, DNS, TLS, timeout)."""

    pass


class ConfigParseError(XDiffException):
    """Profile document could not be read or parsed."""

    pass
