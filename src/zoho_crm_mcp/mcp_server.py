#!/usr/bin/env python3
"""
Zoho CRM MCP Server

Exposes Zoho CRM operations via Model Context Protocol using FastMCP.

Usage:
    # Run with SSE transport (default)
    python -m zoho_crm_mcp.mcp_server

    # Run with custom port
    python -m zoho_crm_mcp.mcp_server --port 8001

    # Run with STDIO transport (for desktop MCP clients)
    python -m zoho_crm_mcp.mcp_server --stdio

Environment Variables:
    ZOHO_REFRESH_TOKEN    - OAuth refresh token (required to mint access tokens)
    ZOHO_CLIENT_ID        - OAuth client ID
    ZOHO_CLIENT_SECRET    - OAuth client secret
    ZOHO_ACCESS_TOKEN     - Optional initial access token
    ZOHO_REGION           - Data center (default: us)
    TRANSPORT             - stdio, sse or http (default: sse)
    PORT                  - Server port (default: 3000)

Note:
    Missing OAuth credentials do not stop the server. They surface as a
    warning at startup and as an error result from the first tool call that
    needs a token refresh.
"""

from __future__ import annotations

import argparse
import asyncio
import os
from typing import Optional

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from zoho_crm_mcp import __version__
from zoho_crm_mcp.client import ZohoCRMClient
from zoho_crm_mcp.credentials import CredentialError, CredentialManager
from zoho_crm_mcp.tools import register_all_tools
from zoho_crm_mcp.utils.logging import configure_logging, get_logger

SERVER_NAME = "zoho-crm-mcp-server"
TRANSPORTS = ("stdio", "sse", "http")
DEFAULT_PORT = 3000

logger = get_logger(__name__)


def create_server(
    credentials: Optional[CredentialManager] = None,
    client: Optional[ZohoCRMClient] = None,
) -> FastMCP:
    """
    Build the FastMCP server with every Zoho CRM tool and a /health route.

    Args:
        credentials: Credential source; defaults to the environment and .env
        client: Shared by every MCP session; built from credentials when omitted

    The server never closes the client. FastMCP may enter its lifespan once
    per session, so the caller that runs the server closes the client after
    the server stops (see main()).
    """
    credentials = credentials or CredentialManager()

    try:
        credentials.validate()
    except CredentialError as e:
        logger.warning(str(e))

    if client is None:
        client = ZohoCRMClient.from_credentials(credentials)

    mcp = FastMCP(SERVER_NAME)

    tools = register_all_tools(mcp, client=client)
    logger.info("Registered %d tools", len(tools))
    logger.debug("Tools: %s", tools)

    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> JSONResponse:
        """Health check endpoint for container orchestration."""
        return JSONResponse({"status": "ok", "server": SERVER_NAME, "version": __version__})

    return mcp


def _default_port() -> int:
    try:
        return int(os.getenv("PORT", str(DEFAULT_PORT)))
    except ValueError:
        return DEFAULT_PORT


async def serve(mcp: FastMCP, client: ZohoCRMClient, transport: str, host: str, port: int) -> None:
    """Run the server until it stops, then close the shared Zoho client."""
    try:
        if transport == "stdio":
            await mcp.run_async(transport="stdio")
        else:
            logger.info("Starting %s server on %s:%s", transport.upper(), host, port)
            await mcp.run_async(transport=transport, host=host, port=port)
    finally:
        await client.aclose()


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the MCP server."""
    parser = argparse.ArgumentParser(description="Zoho CRM MCP Server")
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default=os.getenv("TRANSPORT", "sse").lower(),
        help="MCP transport (default: $TRANSPORT or sse)",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Shortcut for --transport stdio",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=_default_port(),
        help=f"HTTP server port (default: $PORT or {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="HTTP server host (default: 0.0.0.0)",
    )
    args = parser.parse_args(argv)
    transport = "stdio" if args.stdio else args.transport
    if transport not in TRANSPORTS:
        parser.error(f"invalid TRANSPORT {transport!r} (choose from {', '.join(TRANSPORTS)})")

    configure_logging()
    credentials = CredentialManager()
    client = ZohoCRMClient.from_credentials(credentials)
    mcp = create_server(credentials, client=client)

    asyncio.run(serve(mcp, client, transport, args.host, args.port))


if __name__ == "__main__":
    main()
