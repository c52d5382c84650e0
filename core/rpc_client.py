# =============================================================================
# core/rpc_client.py  —  Odoo JSON-RPC Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends one JSON-RPC 2.0 "call" envelope per invocation to the configured
#   Odoo endpoint and returns the decoded `result`.
#
#   Request shape:
#     {"jsonrpc": "2.0", "method": "call",
#      "params": {"service": ..., "method": ..., "args": [...]},
#      "id": <random int>}
#
# ERROR TAXONOMY:
#   - RemoteError       → Odoo answered with an `error` object.  The object is
#                         kept verbatim; we never interpret Odoo error codes.
#   - RpcProtocolError  → the body was not JSON at all.
#   - httpx.HTTPError   → connection / transport failure.  Not caught here.
#
#   No timeout and no retry: a call runs until Odoo answers or the network
#   fails.
# =============================================================================

import json
import logging
import random
from typing import Any, Optional

import httpx

from core.models import RemoteCall, Service

logger = logging.getLogger(__name__)


class RemoteError(Exception):
    """The remote service returned a JSON-RPC error object."""

    def __init__(self, payload: Any):
        self.payload = payload
        super().__init__(json.dumps(payload, separators=(",", ":")))


class RpcProtocolError(Exception):
    """The remote endpoint answered with something that is not JSON-RPC."""


class OdooRpcClient:
    """Stateless JSON-RPC client for a single Odoo endpoint.

    The underlying httpx.AsyncClient may be injected (tests pass one built on
    httpx.MockTransport); otherwise one is created without a timeout.
    """

    def __init__(self, url: str, client: Optional[httpx.AsyncClient] = None):
        self.url = url
        self._client = client or httpx.AsyncClient(timeout=None)

    async def call(self, service: Service, method: str, args: list) -> Any:
        """Issue one remote call and return its `result`."""
        return await self.send(RemoteCall(service, method, tuple(args)))

    async def send(self, call: RemoteCall) -> Any:
        body = {
            "jsonrpc": "2.0",
            "method": "call",
            "params": call.params(),
            "id": random.randint(0, 100000),
        }
        # Args are not logged: execute_kw args carry the password.
        logger.debug("JSON-RPC %s.%s (id=%s)", call.service.value, call.method, body["id"])

        response = await self._client.post(self.url, json=body)
        try:
            payload = response.json()
        except ValueError as exc:
            raise RpcProtocolError(
                f"Non-JSON response from {self.url} (HTTP {response.status_code})"
            ) from exc

        if isinstance(payload, dict) and payload.get("error"):
            logger.warning("Odoo JSON-RPC error: %s", json.dumps(payload["error"]))
            raise RemoteError(payload["error"])
        if not isinstance(payload, dict):
            raise RpcProtocolError(f"Unexpected JSON-RPC response: {payload!r}")
        return payload.get("result")

    async def aclose(self) -> None:
        await self._client.aclose()
