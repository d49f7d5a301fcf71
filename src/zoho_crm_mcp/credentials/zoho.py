"""
Zoho CRM credentials.

Zoho uses OAuth2 (not API keys). To get credentials:

1. Go to https://api-console.zoho.com/
2. Create a Self Client (or a Server-based client)
3. Copy the Client ID and Client Secret
4. Generate a grant code with the ZohoCRM scopes you need and exchange it
   for a refresh token
5. Set ZOHO_CLIENT_ID, ZOHO_CLIENT_SECRET and ZOHO_REFRESH_TOKEN, plus
   ZOHO_REGION when the account lives outside the US data center
"""

from .base import CredentialSpec

_OAUTH_HELP = "https://www.zoho.com/crm/developer/docs/api/v7/access-refresh.html"

ZOHO_CREDENTIALS = {
    "access_token": CredentialSpec(
        env_var="ZOHO_ACCESS_TOKEN",
        required=False,
        help_url=_OAUTH_HELP,
        description="Optional OAuth access token; refreshed automatically when absent or expired",
    ),
    "refresh_token": CredentialSpec(
        env_var="ZOHO_REFRESH_TOKEN",
        required=True,
        help_url=_OAUTH_HELP,
        description="OAuth refresh token used to mint access tokens",
    ),
    "client_id": CredentialSpec(
        env_var="ZOHO_CLIENT_ID",
        required=True,
        help_url="https://api-console.zoho.com/",
        description="Client ID of the Zoho API console client",
    ),
    "client_secret": CredentialSpec(
        env_var="ZOHO_CLIENT_SECRET",
        required=True,
        help_url="https://api-console.zoho.com/",
        description="Client secret of the Zoho API console client",
    ),
    "api_domain": CredentialSpec(
        env_var="ZOHO_API_DOMAIN",
        required=False,
        secret=False,
        description="API host, e.g. https://www.zohoapis.eu (defaults per region)",
    ),
    "accounts_domain": CredentialSpec(
        env_var="ZOHO_ACCOUNTS_DOMAIN",
        required=False,
        secret=False,
        description="OAuth accounts host, e.g. https://accounts.zoho.eu (defaults per region)",
    ),
    "region": CredentialSpec(
        env_var="ZOHO_REGION",
        required=False,
        secret=False,
        description="Data center code: us, eu, in, au, jp, uk, ca, sa or cn (default us)",
    ),
}
