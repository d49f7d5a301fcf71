"""
Zoho data-center endpoints.

Zoho runs separate data centers (US, EU, India, ...). Each has its own OAuth
accounts server and its own API host. ZOHO_REGION picks the pair; explicit
ZOHO_API_DOMAIN / ZOHO_ACCOUNTS_DOMAIN always win over the region defaults.
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import CredentialError

DEFAULT_REGION = "us"


@dataclass(frozen=True)
class ZohoRegion:
    code: str
    api_domain: str
    accounts_domain: str


REGIONS: dict[str, ZohoRegion] = {
    r.code: r
    for r in (
        ZohoRegion("us", "https://www.zohoapis.com", "https://accounts.zoho.com"),
        ZohoRegion("eu", "https://www.zohoapis.eu", "https://accounts.zoho.eu"),
        ZohoRegion("in", "https://www.zohoapis.in", "https://accounts.zoho.in"),
        ZohoRegion("au", "https://www.zohoapis.com.au", "https://accounts.zoho.com.au"),
        ZohoRegion("jp", "https://www.zohoapis.jp", "https://accounts.zoho.jp"),
        ZohoRegion("uk", "https://www.zohoapis.uk", "https://accounts.zoho.uk"),
        ZohoRegion("ca", "https://www.zohoapis.ca", "https://accounts.zohocloud.ca"),
        ZohoRegion("sa", "https://www.zohoapis.sa", "https://accounts.zoho.sa"),
        ZohoRegion("cn", "https://www.zohoapis.com.cn", "https://accounts.zoho.com.cn"),
    )
}


def resolve_region(code: str) -> ZohoRegion:
    """Look up a region by its exact code (case-insensitive)."""
    region = REGIONS.get(code.strip().lower())
    if region is None:
        raise CredentialError(
            f"Unknown ZOHO_REGION '{code}'. Valid values: {', '.join(sorted(REGIONS))}"
        )
    return region
