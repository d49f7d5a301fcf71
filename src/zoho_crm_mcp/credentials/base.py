"""
Base classes for credential management.

Contains the core infrastructure: CredentialSpec, CredentialManager, and CredentialError.
The Zoho credential specs themselves live in zoho.py.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotenv import dotenv_values


@dataclass
class CredentialSpec:
    """Specification for a single credential."""

    env_var: str
    """Environment variable name (e.g., 'ZOHO_REFRESH_TOKEN')"""

    required: bool = True
    """Whether this credential is needed to refresh the access token"""

    secret: bool = True
    """Whether the value must be masked when displayed"""

    help_url: str = ""
    """URL where user can obtain this credential"""

    description: str = ""
    """Human-readable description of what this credential is for"""


class CredentialError(Exception):
    """Raised when required credentials are missing or invalid."""
    pass


class CredentialManager:
    """
    Centralized credential lookup.

    Key features:
    - get(): Retrieves credential value by logical name
    - get_missing(): Lists required credentials that are not set
    - for_testing(): Factory for creating test instances with mock values
    """

    _specs: Dict[str, CredentialSpec]
    _overrides: Dict[str, str]
    _dotenv_path: Optional[Path]

    def __init__(
        self,
        specs: Optional[Dict[str, CredentialSpec]] = None,
        _overrides: Optional[Dict[str, str]] = None,
        dotenv_path: Optional[Path] = None,
    ):
        """
        Initialize the credential manager.

        Args:
            specs: Credential specifications (defaults to CREDENTIAL_SPECS)
            _overrides: Internal - used by for_testing() to inject test values
            dotenv_path: Optional path to .env file (defaults to cwd/.env)
        """
        if specs is None:
            from . import CREDENTIAL_SPECS

            specs = CREDENTIAL_SPECS

        self._specs = specs
        self._overrides = _overrides or {}
        self._dotenv_path = dotenv_path

    @classmethod
    def for_testing(
        cls,
        overrides: Dict[str, str],
        specs: Optional[Dict[str, CredentialSpec]] = None,
        dotenv_path: Optional[Path] = None,
    ) -> "CredentialManager":
        """Create a CredentialManager with test values."""
        return cls(specs=specs, _overrides=overrides, dotenv_path=dotenv_path)

    def _get_raw(self, name: str) -> Optional[str]:
        """
        Get credential from overrides, os.environ, or .env file.

        Returns None if the credential is undefined or not set.

        Priority order:
        1. Test overrides
        2. os.environ
        3. .env file
        """
        if name in self._overrides:
            return self._overrides[name]

        spec = self._specs.get(name)
        if spec is None:
            return None

        env_value = os.environ.get(spec.env_var)
        if env_value:
            return env_value

        return self._read_from_dotenv(spec.env_var)

    def _read_from_dotenv(self, env_var: str) -> Optional[str]:
        """Read a single env var from .env file without mutating os.environ."""
        dotenv_path = self._dotenv_path or Path.cwd() / ".env"
        if not dotenv_path.exists():
            return None

        values = dotenv_values(dotenv_path)
        return values.get(env_var)

    def get(self, name: str) -> Optional[str]:
        """Get a credential value by logical name."""
        if name not in self._specs:
            raise KeyError(
                f"Unknown credential '{name}'. Available: {list(self._specs.keys())}"
            )

        return self._get_raw(name)

    def get_spec(self, name: str) -> CredentialSpec:
        """Get the spec for a credential."""
        if name not in self._specs:
            raise KeyError(f"Unknown credential '{name}'")
        return self._specs[name]

    def names(self) -> List[str]:
        return list(self._specs)

    def is_available(self, name: str) -> bool:
        """Check if a credential is available (set and non-empty)."""
        value = self.get(name)
        return value is not None and value != ""

    def get_missing(self) -> List[Tuple[str, CredentialSpec]]:
        """Get the required credentials that are not set."""
        return [
            (cred_name, spec)
            for cred_name, spec in self._specs.items()
            if spec.required and not self.is_available(cred_name)
        ]

    def validate(self) -> None:
        """Validate that every required credential is available."""
        missing = self.get_missing()
        if missing:
            raise CredentialError(self._format_missing_error(missing))

    def _format_missing_error(self, missing: List[Tuple[str, CredentialSpec]]) -> str:
        """Format a clear, actionable error message for missing credentials."""
        lines = ["Missing Zoho CRM credentials"]
        lines.append("Refreshing the access token needs the following settings:\n")

        for _, spec in missing:
            lines.append(f"  {spec.env_var}")
            if spec.description:
                lines.append(f"    {spec.description}")
            if spec.help_url:
                lines.append(f"    Get it at: {spec.help_url}")
            lines.append(f"    Set via: export {spec.env_var}=...\n")

        lines.append("Set these environment variables (or add them to .env) and retry.")
        return "\n".join(lines)
