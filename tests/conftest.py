"""Shared fixtures: an in-memory Odoo JSON-RPC endpoint behind httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from core.config import OdooSettings
from core.explorer import OdooExplorer
from core.rpc_client import OdooRpcClient
from core.session import OdooSession


ODOO_URL = "http://odoo.test/jsonrpc"

REMOTE_ERROR = {
    "code": 200,
    "message": "Odoo Server Error",
    "data": {"name": "builtins.ValueError", "message": "Invalid field 'nope' on model 'res.partner'"},
}

PARTNER_FIELDS = {
    "name": {"string": "Name", "type": "char", "required": True},
    "email": {"string": "Email", "type": "char", "help": "Primary contact address"},
    "parent_id": {"string": "Related Company", "type": "many2one", "relation": "res.partner"},
    "child_ids": {"string": "Contact", "type": "one2many", "relation": "res.partner"},
    "category_id": {"string": "Tags", "type": "many2many", "relation": "res.partner.category"},
    "active": {"string": "Active", "type": "boolean"},
}


class FakeOdoo:
    """Answers login, search_read, search_count, read and fields_get.

    `errors` maps a remote method name ("login", "search_read", ...) to the
    JSON-RPC error object to return instead of a result.
    """

    def __init__(self, uid=7, records=None, fields=None, login_delay=0.0):
        self.uid = uid
        self.records = records if records is not None else {}
        self.fields = fields if fields is not None else {}
        self.login_delay = login_delay
        self.errors = {}
        self.requests = []

    # --- introspection helpers for assertions ---
    @property
    def login_calls(self):
        return [p for p in self.requests if p["params"]["service"] == "common"]

    @property
    def object_calls(self):
        return [p["params"]["args"] for p in self.requests if p["params"]["service"] == "object"]

    def last_call(self):
        return self.object_calls[-1]

    # --- transport ---
    async def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        params = body["params"]

        if params["service"] == "common":
            if self.login_delay:
                await asyncio.sleep(self.login_delay)
            return self._reply(body, "login", lambda: self.uid)

        _db, _uid, _pwd, model, method, positional, *rest = params["args"]
        keywords = rest[0] if rest else {}
        handlers = {
            "search_read": lambda: self._search_read(model, positional, keywords),
            "search_count": lambda: len(self._filter(model, positional)),
            "read": lambda: self._read(model, positional, keywords),
            "fields_get": lambda: self.fields.get(model, {}),
        }
        return self._reply(body, method, handlers[method])

    def _reply(self, body, method, produce):
        if method in self.errors:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "error": self.errors[method]})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": produce()})

    # --- a tiny subset of Odoo semantics ---
    def _filter(self, model, domain):
        rows = self.records.get(model, [])
        for clause in domain:
            if isinstance(clause, str):
                continue
            name, operator, value = clause
            if operator == "=":
                rows = [r for r in rows if r.get(name) == value]
        return rows

    @staticmethod
    def _project(row, fields):
        if not fields:
            return dict(row)
        return {k: v for k, v in row.items() if k == "id" or k in fields}

    def _search_read(self, model, domain, keywords):
        rows = self._filter(model, domain)
        offset = keywords.get("offset", 0)
        rows = rows[offset:]
        if "limit" in keywords:
            rows = rows[: keywords["limit"]]
        return [self._project(r, keywords.get("fields")) for r in rows]

    def _read(self, model, ids, keywords):
        rows = [r for r in self.records.get(model, []) if r["id"] in ids]
        return [self._project(r, keywords.get("fields")) for r in rows]


@pytest.fixture
def settings():
    return OdooSettings(url=ODOO_URL, database="testdb", username="admin", password="secret")


@pytest.fixture
def fake_odoo():
    return FakeOdoo(
        uid=7,
        records={
            "res.partner": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}],
            "ir.model": [
                {"id": 80, "model": "res.partner", "name": "Contact"},
                {"id": 81, "model": "sale.order", "name": "Sales Order"},
            ],
        },
        fields={"res.partner": PARTNER_FIELDS},
    )


@pytest.fixture
def rpc(fake_odoo):
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_odoo.handler))
    return OdooRpcClient(ODOO_URL, client=client)


@pytest.fixture
def session(rpc, settings):
    return OdooSession(rpc, settings)


@pytest.fixture
def explorer(session):
    return OdooExplorer(session)
