# =============================================================================
# core/config.py  —  Process Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the Odoo connection settings (and the two optional extras used by
#   the method lookup and the interactive agent) from the environment, once,
#   at startup.
#
# WHERE .env FITS IN:
#   Entry points (tools/mcp_server.py, main.py) call python-dotenv's
#   load_dotenv() before load_settings(), so values from a local .env file
#   show up here as ordinary environment variables.  This module itself only
#   reads a mapping, which keeps it trivial to test.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_ODOO_URL = "http://localhost:8069/jsonrpc"
DEFAULT_SOURCE_BRANCH = "18.0"
DEFAULT_EXPLORER_MODEL = "openrouter/openai/gpt-4o"


@dataclass(frozen=True)
class OdooSettings:
    """Connection settings for one Odoo database."""

    url: str = DEFAULT_ODOO_URL
    database: str = "your_db"
    username: str = "admin"
    password: str = "admin"

    # --- Auxiliary method lookup (GitHub code search) ---
    github_token: Optional[str] = None
    source_branch: str = DEFAULT_SOURCE_BRANCH

    # --- Interactive explorer agent ---
    explorer_model: str = DEFAULT_EXPLORER_MODEL

    def __repr__(self) -> str:
        # Never leak credentials into logs or tracebacks.
        return (
            f"OdooSettings(url={self.url!r}, database={self.database!r}, "
            f"username={self.username!r}, password='***')"
        )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> OdooSettings:
    """Build settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ).

    Returns:
        An immutable OdooSettings.  Unset or empty variables fall back to
        the defaults above.
    """
    env = os.environ if environ is None else environ

    def _get(name: str, default: str) -> str:
        return env.get(name) or default

    return OdooSettings(
        url=_get("ODOO_URL", DEFAULT_ODOO_URL),
        database=_get("ODOO_DB", "your_db"),
        username=_get("ODOO_USER", "admin"),
        password=_get("ODOO_PASSWORD", "admin"),
        github_token=env.get("GITHUB_TOKEN") or None,
        source_branch=_get("ODOO_SOURCE_BRANCH", DEFAULT_SOURCE_BRANCH),
        explorer_model=_get("EXPLORER_MODEL", DEFAULT_EXPLORER_MODEL),
    )
