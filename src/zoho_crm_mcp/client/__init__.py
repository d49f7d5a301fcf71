"""
Zoho CRM client core: session, token refresh, dispatch and error taxonomy.
"""

from .crm_client import DEFAULT_TIMEOUT, ZohoCRMClient
from .dispatcher import MAX_ATTEMPTS, RequestDescriptor, RequestDispatcher
from .errors import (
    AuthenticationError,
    ConfigurationError,
    ErrorKind,
    NetworkError,
    ZohoAPIError,
    ZohoError,
)
from .session import SessionState, ZohoSession
from .token_manager import TokenManager

__all__ = [
    "DEFAULT_TIMEOUT",
    "MAX_ATTEMPTS",
    "AuthenticationError",
    "ConfigurationError",
    "ErrorKind",
    "NetworkError",
    "RequestDescriptor",
    "RequestDispatcher",
    "SessionState",
    "TokenManager",
    "ZohoAPIError",
    "ZohoCRMClient",
    "ZohoError",
    "ZohoSession",
]
