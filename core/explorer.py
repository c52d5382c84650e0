# =============================================================================
# core/explorer.py  —  Tool Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One coroutine per tool.  Each one:
#     1. resolves the Odoo identity through the shared OdooSession
#     2. normalizes its own parameters (core/query.py)
#     3. issues exactly one execute_kw call
#     4. renders the result as text (core/formatting.py)
#
#   tools/mcp_server.py only wraps these coroutines as MCP tools; everything
#   that can be tested without an MCP client lives here.
#
# ERROR POLICY:
#   @remote_errors attaches each tool's ErrorPolicy from TOOL_POLICIES.
#   Identity resolution always happens before the guarded section, so a login
#   failure aborts every tool.  For DEGRADE_TO_TEXT tools a RemoteError from
#   the tool's own call becomes the tool's text; for PROPAGATE tools it fails
#   the call.  Transport errors are never caught.
# =============================================================================

import functools
import inspect
import logging
from typing import Optional

from core import query
from core.config import OdooSettings
from core.formatting import (
    format_count,
    format_fields,
    format_method_lookup,
    format_model_list,
    format_record,
    format_record_lines,
    format_related_models,
    format_search_results,
)
from core.models import Domain, ErrorPolicy, TOOL_POLICIES
from core.rpc_client import OdooRpcClient, RemoteError
from core.session import OdooSession
from core.source_search import GitHubMethodSource, MethodSource

logger = logging.getLogger(__name__)


def remote_errors(tool: str, message: Optional[str] = None):
    """Apply `tool`'s ErrorPolicy to an OdooExplorer coroutine.

    `message` is a str.format template over the coroutine's arguments plus
    `error`; it is required for DEGRADE_TO_TEXT tools.
    """
    policy = TOOL_POLICIES[tool]
    if policy is ErrorPolicy.DEGRADE_TO_TEXT and message is None:
        raise ValueError(f"{tool} degrades to text but has no error message")

    def decorate(func):
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            await self.session.ensure_identity()
            if policy is ErrorPolicy.PROPAGATE:
                return await func(self, *args, **kwargs)
            try:
                return await func(self, *args, **kwargs)
            except RemoteError as exc:
                logger.warning("%s failed remotely: %s", tool, exc)
                arguments = signature.bind(self, *args, **kwargs)
                arguments.apply_defaults()
                values = {k: v for k, v in arguments.arguments.items() if k != "self"}
                return message.format(error=exc, **values)

        wrapper.tool_name = tool
        wrapper.error_policy = policy
        return wrapper

    return decorate


class OdooExplorer:
    """Read-only exploration operations over one Odoo database."""

    def __init__(
        self,
        session: OdooSession,
        method_source: Optional[MethodSource] = None,
        default_branch: str = "18.0",
    ):
        self.session = session
        self.method_source = method_source
        self.default_branch = default_branch

    @classmethod
    def from_settings(cls, settings: OdooSettings) -> "OdooExplorer":
        session = OdooSession(OdooRpcClient(settings.url), settings)
        return cls(
            session,
            method_source=GitHubMethodSource(settings.github_token),
            default_branch=settings.source_branch,
        )

    # =========================================================================
    # Model registry
    # =========================================================================
    @remote_errors("list-odoo-models")
    async def list_models(self) -> str:
        models = await self.session.search_read(
            query.MODEL_REGISTRY, [], query.list_models_options().as_kwargs()
        )
        return format_model_list(models)

    @remote_errors("search-model")
    async def search_models(
        self,
        domain: Optional[Domain],
        limit: Optional[int],
        fields: Optional[list[str]] = None,
    ) -> str:
        options = query.model_search_options(limit, fields)
        records = await self.session.search_read(
            query.MODEL_REGISTRY, query.normalize_domain(domain), options.as_kwargs()
        )
        return format_record_lines(records)

    # =========================================================================
    # Field metadata
    # =========================================================================
    @remote_errors("get-model-fields")
    async def get_model_fields(self, model: str) -> str:
        fields = await self.session.execute_kw(
            model, "fields_get", [], {"attributes": list(query.FIELD_ATTRIBUTES)}
        )
        return format_fields(fields or {})

    @remote_errors("get-related-models")
    async def get_related_models(self, model: str) -> str:
        fields = await self.session.execute_kw(
            model, "fields_get", [], {"attributes": list(query.RELATION_ATTRIBUTES)}
        )
        return format_related_models(fields or {})

    # =========================================================================
    # Records
    # =========================================================================
    @remote_errors("get-model-records")
    async def get_model_records(
        self,
        model: str,
        limit: Optional[int],
        fields: Optional[list[str]] = None,
    ) -> str:
        options = query.sample_options(limit, fields)
        records = await self.session.search_read(model, [], options.as_kwargs())
        return format_record_lines(records)

    @remote_errors("search-records", "Error searching records in {model}: {error}")
    async def search_records(
        self,
        model: str,
        domain: Optional[Domain] = None,
        fields: Optional[list[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order: Optional[str] = None,
    ) -> str:
        options = query.search_options(fields, limit, offset, order)
        records = await self.session.search_read(
            model, query.normalize_domain(domain), options.as_kwargs()
        )
        return format_search_results(records)

    @remote_errors("count-records", "Error counting records in {model}: {error}")
    async def count_records(self, model: str, domain: Optional[Domain] = None) -> str:
        domain = query.normalize_domain(domain)
        count = await self.session.execute_kw(model, "search_count", domain)
        return format_count(model, count, filtered=bool(domain))

    @remote_errors("get-record", "Error fetching record {record_id} from {model}: {error}")
    async def get_record(
        self,
        model: str,
        record_id: int,
        fields: Optional[list[str]] = None,
    ) -> str:
        options = query.read_options(fields)
        records = await self.session.execute_kw(model, "read", [record_id], options.as_kwargs())
        return format_record(model, record_id, records or [])

    # =========================================================================
    # Source code (auxiliary, outside the JSON-RPC bridge)
    # =========================================================================
    async def get_model_methods(self, model: str, branch: Optional[str] = None) -> str:
        if self.method_source is None:
            return "Method lookup is not available."
        lookup = await self.method_source.find_methods_for_model(model, branch or self.default_branch)
        return format_method_lookup(lookup)

    async def aclose(self) -> None:
        await self.session.rpc.aclose()
        close = getattr(self.method_source, "aclose", None)
        if close is not None:
            await close()
