from __future__ import annotations

import logging
import os
import re

_HANDLER_ATTR = "_zoho_crm_mcp_logging_handler"
_BASE_LOGGER = "zoho_crm_mcp"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

REDACTED = "****"
_SECRET_PATTERNS = (
    re.compile(r"(Zoho-oauthtoken\s+)[^\s\"',}]+"),
    re.compile(
        r"((?:access_token|refresh_token|client_secret)[\"']?\s*[:=]\s*[\"']?)[^\s\"'&,}]+"
    ),
)


def redact_secrets(text: str) -> str:
    """Mask OAuth tokens and the client secret in a log line."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(rf"\g<1>{REDACTED}", text)
    return text


class SecretRedactingFilter(logging.Filter):
    """
    Rewrites each record's message and traceback with secrets masked.
    Installed on the handler, so it covers every zoho_crm_mcp logger.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        if record.exc_info and not record.exc_text:
            record.exc_text = redact_secrets(
                logging.Formatter().formatException(record.exc_info)
            )
        return True


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """
    Configure zoho_crm_mcp logging once (idempotent).
    Logs always go to stderr; stdout carries the STDIO JSON-RPC stream.
    """

    base_logger = logging.getLogger(_BASE_LOGGER)

    if any(getattr(h, _HANDLER_ATTR, False) for h in base_logger.handlers):
        return

    resolved_level = (level or os.getenv("ZOHO_MCP_LOG_LEVEL", "INFO")).upper()
    resolved_fmt = fmt or os.getenv("ZOHO_MCP_LOG_FORMAT", DEFAULT_FORMAT)

    # StreamHandler defaults to stderr.
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(resolved_fmt))
    handler.addFilter(SecretRedactingFilter())
    setattr(handler, _HANDLER_ATTR, True)

    try:
        base_logger.setLevel(resolved_level)
    except ValueError:
        base_logger.setLevel("INFO")

    base_logger.addHandler(handler)
    base_logger.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return a logger. Pass __name__ from modules to inherit the package config.
    """

    configure_logging()

    return logging.getLogger(name or _BASE_LOGGER)
