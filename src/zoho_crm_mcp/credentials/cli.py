from __future__ import annotations

import argparse
import asyncio

from .base import CredentialError, CredentialManager


def _mask(value: str) -> str:
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}...{value[-4:]}"


async def _try_refresh(creds: CredentialManager) -> str:
    from zoho_crm_mcp.client import ZohoCRMClient

    client = ZohoCRMClient.from_credentials(creds)
    try:
        await client.tokens.refresh()
        return client.session.get().api_domain
    finally:
        await client.aclose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="zoho-crm-mcp-credentials",
        description="Check and validate Zoho CRM credentials.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    check = sub.add_parser("check", help="Check for missing credentials.")
    check.add_argument(
        "--refresh",
        action="store_true",
        help="Also exchange the refresh token for an access token.",
    )

    args = parser.parse_args(argv)
    creds = CredentialManager()

    if args.cmd != "check":
        return 2

    for name in creds.names():
        spec = creds.get_spec(name)
        value = creds.get(name)
        if value:
            shown = _mask(value) if spec.secret else value
            print(f"✓ {spec.env_var} = {shown}")
        else:
            print(f"- {spec.env_var} (not set)")
    print()

    missing = creds.get_missing()
    if missing:
        print("✗ Missing required credentials:\n")
        for _cred_name, spec in missing:
            print(f"- {spec.env_var}: {spec.description}")
            if spec.help_url:
                print(f"  Help: {spec.help_url}")
        return 1

    print("✓ All required credentials are present.")

    if args.refresh:
        from zoho_crm_mcp.client import ZohoError

        try:
            api_domain = asyncio.run(_try_refresh(creds))
        except (ZohoError, CredentialError) as e:
            print(f"✗ {e}")
            return 1
        print(f"✓ Token refresh succeeded (API domain: {api_domain}).")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
