"""
Error taxonomy for the Zoho CRM client.

Every failure leaving the client core is one of four kinds. Callers branch on
``ZohoError.kind`` (or the subclass) instead of matching message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """What went wrong, independent of the message."""

    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    API = "api"
    NETWORK = "network"


class ZohoError(Exception):
    """Base class for all client failures."""

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        return self.message


class ConfigurationError(ZohoError):
    """A credential needed for the OAuth refresh is missing."""

    kind = ErrorKind.CONFIGURATION


class AuthenticationError(ZohoError):
    """The refresh call failed, or a request was rejected after one retry."""

    kind = ErrorKind.AUTHENTICATION


class ZohoAPIError(ZohoError):
    """Zoho answered with a non-2xx status (or an unreadable body)."""

    kind = ErrorKind.API


class NetworkError(ZohoError):
    """The HTTP request never produced a response."""

    kind = ErrorKind.NETWORK
