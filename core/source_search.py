# =============================================================================
# core/source_search.py  —  Model Method Lookup (best-effort)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Guesses the Python class behind an Odoo model (res.partner → ResPartner),
#   searches the odoo/odoo repository on GitHub for files defining it, and
#   lists the methods found in each class body.
#
# ISOLATION FROM THE BRIDGE:
#   This is text scraping of a third-party code host, not part of the
#   JSON-RPC bridge.  It has its own HTTP client, never touches the Odoo
#   session, and every failure comes back as a MethodLookup value instead of
#   an exception.  Callers depend only on the MethodSource protocol.
# =============================================================================

import logging
import re
from typing import Optional, Protocol

import httpx

from core.models import ClassMethods, MethodLookup

logger = logging.getLogger(__name__)

GITHUB_SEARCH_URL = "https://api.github.com/search/code"
ODOO_REPO = "odoo/odoo"

_METHOD_RE = re.compile(r"^\s+def\s+([a-zA-Z0-9_]+)\s*\(", re.MULTILINE)


class MethodSource(Protocol):
    async def find_methods_for_model(self, model: str, branch: str) -> MethodLookup: ...


def model_to_class_name(model: str) -> str:
    """`sale.order_line` → `SaleOrderLine`."""
    return "".join(
        word[:1].upper() + word[1:]
        for part in model.split(".")
        for word in part.split("_")
    )


def raw_url(html_url: str) -> str:
    """Turn a github.com blob URL into its raw.githubusercontent.com twin."""
    return html_url.replace("github.com", "raw.githubusercontent.com", 1).replace("/blob/", "/", 1)


def extract_class_methods(source: str, class_name: str) -> Optional[tuple[list[str], list[str]]]:
    """Return (public, private) method names of `class_name` in `source`.

    The class body runs from its `class` statement to the next top-level
    `class` statement or the end of the file.  Returns None when the class
    is not defined in the source.
    """
    class_re = re.compile(
        rf"class\s+{re.escape(class_name)}\b[^{{:]*:[\s\S]*?(?=^class |\Z)",
        re.MULTILINE,
    )
    match = class_re.search(source)
    if not match:
        return None

    public: list[str] = []
    private: list[str] = []
    for name in _METHOD_RE.findall(match.group(0)):
        (private if name.startswith("_") else public).append(name)
    return public, private


class GitHubMethodSource:
    """MethodSource backed by GitHub code search over odoo/odoo."""

    def __init__(self, token: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.token = token
        self._client = client or httpx.AsyncClient(timeout=30.0, follow_redirects=True)

    def _search_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _search(self, class_name: str) -> list[dict]:
        query = f"repo:{ODOO_REPO} class {class_name} language:python"
        response = await self._client.get(
            GITHUB_SEARCH_URL, params={"q": query}, headers=self._search_headers()
        )
        if response.status_code != 200:
            raise RuntimeError(f"GitHub search failed: {response.status_code} - {response.text}")
        return response.json().get("items") or []

    async def _fetch_source(self, html_url: str) -> Optional[str]:
        try:
            response = await self._client.get(raw_url(html_url))
        except httpx.HTTPError as exc:
            logger.info("Skipping %s: %s", html_url, exc)
            return None
        if response.status_code != 200:
            return None
        return response.text

    async def find_methods_for_model(self, model: str, branch: str) -> MethodLookup:
        class_name = model_to_class_name(model)
        lookup = MethodLookup(class_name=class_name, branch=branch)

        try:
            items = await self._search(class_name)
        except (httpx.HTTPError, RuntimeError, ValueError) as exc:
            lookup.error = str(exc)
            return lookup

        lookup.files_found = len(items)
        for item in items:
            html_url = item.get("html_url")
            if not html_url:
                continue
            source = await self._fetch_source(html_url)
            if source is None:
                continue
            methods = extract_class_methods(source, class_name)
            if methods is None:
                continue
            public, private = methods
            lookup.matches.append(
                ClassMethods(file=item.get("path", html_url), public_methods=public, private_methods=private)
            )
        return lookup

    async def aclose(self) -> None:
        await self._client.aclose()
