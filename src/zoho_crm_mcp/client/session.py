"""
Session state: the credentials and data-center endpoints of one Zoho account.

A ``ZohoSession`` is constructed once at startup and handed to the token
manager and the dispatcher. Only the token manager writes to it, and only
``access_token`` and ``api_domain``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from zoho_crm_mcp.credentials.regions import DEFAULT_REGION, resolve_region

if TYPE_CHECKING:
    from zoho_crm_mcp.credentials import CredentialManager


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the session. Empty strings mean "not set"."""

    access_token: str = ""
    refresh_token: str = ""
    client_id: str = ""
    client_secret: str = ""
    api_domain: str = ""
    accounts_domain: str = ""

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks.
        return (
            f"SessionState(api_domain={self.api_domain!r}, "
            f"accounts_domain={self.accounts_domain!r}, "
            f"has_access_token={bool(self.access_token)}, "
            f"has_refresh_token={bool(self.refresh_token)})"
        )


class ZohoSession:
    """Mutable holder of the current ``SessionState``. Not locked."""

    def __init__(self, state: SessionState | None = None):
        self._state = state or SessionState()

    def get(self) -> SessionState:
        """Return the current snapshot."""
        return self._state

    def update(self, **fields: str) -> None:
        """Merge ``fields`` into the store. Unknown field names raise TypeError."""
        self._state = replace(self._state, **fields)

    @property
    def access_token(self) -> str:
        return self._state.access_token

    @classmethod
    def from_credentials(cls, credentials: CredentialManager) -> ZohoSession:
        """
        Build the session from process configuration.

        API and accounts domains default to the public endpoints of the
        configured region (``ZOHO_REGION``, default ``us``).
        """
        region = resolve_region(credentials.get("region") or DEFAULT_REGION)
        api_domain = credentials.get("api_domain") or region.api_domain
        accounts_domain = credentials.get("accounts_domain") or region.accounts_domain
        return cls(
            SessionState(
                access_token=credentials.get("access_token") or "",
                refresh_token=credentials.get("refresh_token") or "",
                client_id=credentials.get("client_id") or "",
                client_secret=credentials.get("client_secret") or "",
                api_domain=api_domain.rstrip("/"),
                accounts_domain=accounts_domain.rstrip("/"),
            )
        )
