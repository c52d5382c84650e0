# =============================================================================
# core/session.py  —  Odoo Session Manager
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Owns the one piece of mutable state in the bridge: the Odoo uid obtained
#   by logging in.  Every tool resolves its identity through
#   OdooSession.ensure_identity() and issues model calls through
#   OdooSession.execute_kw().
#
# SINGLE-FLIGHT LOGIN:
#   The first caller starts the login as an asyncio Task and stores it as the
#   pending login.  Callers arriving while it is in flight await the same
#   Task, so at most one login request is ever in flight.  Once it succeeds
#   the uid is cached for the rest of the process; there is no expiry and no
#   re-login.
#
#   A failed login propagates its error to every waiter unchanged.  The Task
#   clears the pending slot itself when it finishes, so a later tool call
#   starts a fresh attempt even if every waiter was cancelled meanwhile.
#   Odoo reports wrong credentials as a False uid; that is raised as
#   AuthenticationError and never cached.
# =============================================================================

import asyncio
import logging
from typing import Any, Optional

from core.config import OdooSettings
from core.models import Domain, Service
from core.rpc_client import OdooRpcClient

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """The login call succeeded but Odoo refused the credentials."""


class OdooSession:
    """Authenticated access to one Odoo database."""

    def __init__(self, rpc: OdooRpcClient, settings: OdooSettings):
        self.rpc = rpc
        self.settings = settings
        self._uid: Optional[int] = None
        self._pending_login: Optional[asyncio.Task] = None

    @property
    def uid(self) -> Optional[int]:
        return self._uid

    async def ensure_identity(self) -> int:
        """Return the cached uid, logging in on first use."""
        if self._uid is not None:
            return self._uid

        if self._pending_login is None:
            login = asyncio.ensure_future(self._login())
            login.add_done_callback(self._login_finished)
            self._pending_login = login
        # shield(): a cancelled waiter must not cancel the login the other
        # waiters are sharing.
        return await asyncio.shield(self._pending_login)

    def _login_finished(self, login: asyncio.Task) -> None:
        # Runs even when every waiter was cancelled, so a failed login never
        # stays parked in the pending slot.
        if self._pending_login is login:
            self._pending_login = None
        if not login.cancelled() and login.exception() is not None:
            logger.warning("Odoo login failed for user %s: %s", self.settings.username, login.exception())

    async def _login(self) -> int:
        uid = await self.rpc.call(
            Service.COMMON,
            "login",
            [self.settings.database, self.settings.username, self.settings.password],
        )
        if not uid:
            # Odoo answers bad credentials with False, not a JSON-RPC error.
            raise AuthenticationError(
                f"Odoo login refused for user {self.settings.username!r} on database {self.settings.database!r}"
            )
        self._uid = uid
        logger.info("Odoo session uid: %s (user: %s)", uid, self.settings.username)
        return uid

    async def execute_kw(
        self,
        model: str,
        method: str,
        positional: Any = None,
        keywords: Optional[dict] = None,
    ) -> Any:
        """Call `model.method` through the object service's execute_kw.

        `positional` is the single positional argument Odoo receives (a
        domain for search_read/search_count, an id list for read); it
        defaults to an empty list.  `keywords` is omitted from the wire call
        when None.
        """
        uid = await self.ensure_identity()
        args: list = [
            self.settings.database,
            uid,
            self.settings.password,
            model,
            method,
            [] if positional is None else positional,
        ]
        if keywords is not None:
            args.append(keywords)
        return await self.rpc.call(Service.OBJECT, "execute_kw", args)

    async def search_read(self, model: str, domain: Domain, keywords: dict) -> list:
        return await self.execute_kw(model, "search_read", domain, keywords)
