"""Tests for the best-effort GitHub method lookup."""

import httpx
import pytest

from core.source_search import (
    GitHubMethodSource,
    extract_class_methods,
    model_to_class_name,
    raw_url,
)


PARTNER_SOURCE = '''\
from odoo import api, fields, models


class ResPartnerCategory(models.Model):
    _name = "res.partner.category"

    def name_get(self):
        pass


class ResPartner(models.Model):
    _name = "res.partner"

    @api.depends("name")
    def _compute_display_name(self):
        pass

    def write(self, vals):
        return super().write(vals)

    def _fields_sync(self, values):
        pass


class ResPartnerBank(models.Model):
    def unlink(self):
        pass
'''

SEARCH_HIT = {
    "path": "odoo/addons/base/models/res_partner.py",
    "html_url": "https://github.com/odoo/odoo/blob/abc123/odoo/addons/base/models/res_partner.py",
}


class TestHelpers:
    @pytest.mark.parametrize(
        "model, expected",
        [
            ("res.partner", "ResPartner"),
            ("sale.order_line", "SaleOrderLine"),
            ("account.move.line", "AccountMoveLine"),
        ],
    )
    def test_model_to_class_name(self, model, expected):
        assert model_to_class_name(model) == expected

    def test_raw_url(self):
        assert raw_url(SEARCH_HIT["html_url"]) == (
            "https://raw.githubusercontent.com/odoo/odoo/abc123/odoo/addons/base/models/res_partner.py"
        )

    def test_extract_stops_at_next_class(self):
        public, private = extract_class_methods(PARTNER_SOURCE, "ResPartner")

        assert public == ["write"]
        assert private == ["_compute_display_name", "_fields_sync"]

    def test_extract_does_not_match_prefix_names(self):
        public, _ = extract_class_methods(PARTNER_SOURCE, "ResPartnerCategory")
        assert public == ["name_get"]

    def test_extract_missing_class(self):
        assert extract_class_methods(PARTNER_SOURCE, "SaleOrder") is None


def _source(handler, token=None):
    return GitHubMethodSource(token, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestGitHubMethodSource:
    @pytest.mark.asyncio
    async def test_search_then_fetch(self):
        seen = []

        def handler(request):
            seen.append(request)
            if request.url.host == "api.github.com":
                return httpx.Response(200, json={"items": [SEARCH_HIT]})
            return httpx.Response(200, text=PARTNER_SOURCE)

        lookup = await _source(handler, token="ghp_test").find_methods_for_model("res.partner", "18.0")

        assert lookup.class_name == "ResPartner"
        assert lookup.files_found == 1
        assert lookup.matches[0].file == SEARCH_HIT["path"]
        assert lookup.matches[0].public_methods == ["write"]
        search = seen[0]
        assert search.headers["Authorization"] == "Bearer ghp_test"
        assert search.url.params["q"] == "repo:odoo/odoo class ResPartner language:python"
        assert seen[1].url.host == "raw.githubusercontent.com"

    @pytest.mark.asyncio
    async def test_search_failure_is_reported_not_raised(self):
        lookup = await _source(lambda request: httpx.Response(403, text="rate limited")).find_methods_for_model(
            "res.partner", "18.0"
        )

        assert lookup.error == "GitHub search failed: 403 - rate limited"

    @pytest.mark.asyncio
    async def test_network_failure_is_reported_not_raised(self):
        def handler(request):
            raise httpx.ConnectError("no route", request=request)

        lookup = await _source(handler).find_methods_for_model("res.partner", "18.0")
        assert "no route" in lookup.error

    @pytest.mark.asyncio
    async def test_unreachable_files_are_skipped(self):
        def handler(request):
            if request.url.host == "api.github.com":
                return httpx.Response(200, json={"items": [SEARCH_HIT, SEARCH_HIT]})
            return httpx.Response(404)

        lookup = await _source(handler).find_methods_for_model("res.partner", "18.0")

        assert lookup.files_found == 2
        assert lookup.matches == []
        assert lookup.error is None

    @pytest.mark.asyncio
    async def test_no_hits(self):
        lookup = await _source(lambda request: httpx.Response(200, json={"items": []})).find_methods_for_model(
            "res.partner", "18.0"
        )
        assert lookup.files_found == 0
        assert lookup.error is None
