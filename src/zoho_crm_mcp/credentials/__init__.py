"""
Credential management for the Zoho CRM MCP server.

Usage:
    from zoho_crm_mcp.credentials import CredentialManager

    credentials = CredentialManager()
    refresh_token = credentials.get("refresh_token")

    # In tests
    credentials = CredentialManager.for_testing({"refresh_token": "test-token"})
"""

from .base import CredentialError, CredentialManager, CredentialSpec
from .zoho import ZOHO_CREDENTIALS

CREDENTIAL_SPECS = {
    **ZOHO_CREDENTIALS,
}

__all__ = [
    "CredentialSpec",
    "CredentialManager",
    "CredentialError",
    "CREDENTIAL_SPECS",
    "ZOHO_CREDENTIALS",
]
