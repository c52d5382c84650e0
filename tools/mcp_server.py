# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the Odoo exploration operations as MCP tools.  Each tool is a
#   thin wrapper around an OdooExplorer coroutine from core/explorer.py. It
#   declares the parameter schema, logs the call, and returns the text.
#
# HOW IT WORKS (the flow):
#   1. An MCP client calls a tool by name (e.g., "search-records")
#   2. FastMCP validates the arguments against the annotated signature
#   3. The wrapper awaits the matching OdooExplorer method
#   4. The method logs in once (shared session), calls Odoo, formats text
#   5. FastMCP wraps the string as a single {"type": "text"} content block
#
# ERRORS:
#   Tools never catch exceptions here.  Whatever OdooExplorer raises (login
#   failures, remote errors of PROPAGATE tools, transport errors) becomes an
#   MCP error result for that call.  Tools whose policy is DEGRADE_TO_TEXT
#   have already turned their remote errors into text in core/.
#
# TOOL NAMING:
#   Public names are the hyphenated names MCP clients already use
#   ("list-odoo-models", "get-record", ...).  All tools are read-only.
#
# RUNNING THIS SERVER:
#     a) Standalone over stdio:  python -m tools.mcp_server
#     b) Installed:              odoo-explorer-server
#     c) Spawned by the explorer agent (agent/explorer_agent.py)
# =============================================================================

import logging
import sys
from typing import Annotated, Optional, Union

from dotenv import load_dotenv
from fastmcp import FastMCP
from pydantic import Field

# --- Import core logic ---
# The tools layer depends on core/ and nothing else.
from core.config import load_settings
from core.explorer import OdooExplorer

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: stdout is the MCP stdio transport, and anything else
# written there corrupts the protocol stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (text output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

_RESPONSE_PREVIEW_CHARS = 300

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log a preview of the tool's text in GREEN, then return it."""
    preview = text if len(text) <= _RESPONSE_PREVIEW_CHARS else text[:_RESPONSE_PREVIEW_CHARS] + "..."
    preview = preview.replace("\n", "\\n")
    logging.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {preview}{_RESET}")
    return text


# =============================================================================
# Parameter types shared by several tools
# =============================================================================
ModelName = Annotated[str, Field(description="Technical name of the Odoo model (e.g. res.partner)")]
FieldList = Annotated[
    Optional[list[str]],
    Field(description="List of fields to fetch (optional, fetches all if not specified)"),
]
RecordDomain = Annotated[
    Optional[list[Union[list[Union[str, int, float, bool, None]], str]]],
    Field(
        description='Odoo domain filter (e.g. [["name", "ilike", "John"], ["active", "=", true]] '
        "or empty for all records)"
    ),
]


# =============================================================================
# Server factory
# =============================================================================
# The tools close over one OdooExplorer, so the whole server shares a single
# Odoo session.  Tests build a server around an explorer whose HTTP client
# talks to a stub transport.
# =============================================================================
def create_server(explorer: OdooExplorer, name: str = "odoo-model-explorer") -> FastMCP:
    mcp = FastMCP(name)

    # -------------------------------------------------------------------------
    # Model registry
    # -------------------------------------------------------------------------
    @mcp.tool(name="list-odoo-models")
    async def list_odoo_models() -> str:
        """List all Odoo models in the configured database.

        Returns one line per model: "<technical name>: <label>".
        """
        _log_request("list-odoo-models")
        return _log_response("list-odoo-models", await explorer.list_models())

    @mcp.tool(name="search-model")
    async def search_model(
        domain: Annotated[
            list[list[str]],
            Field(
                description='Odoo domain filter for ir.model (e.g. [["model", "=", "res.partner"]] '
                'or [["state", "ilike", "manual"]])'
            ),
        ],
        limit: Annotated[int, Field(description="Number of model records to return")],
        fields: Annotated[
            Optional[list[str]],
            Field(description='List of ir.model fields to fetch (optional, e.g. ["model", "name", "state"])'),
        ] = None,
    ) -> str:
        """Search Odoo models (ir.model) with a domain filter and return matching model records."""
        _log_request("search-model", domain=domain, limit=limit, fields=fields)
        return _log_response("search-model", await explorer.search_models(domain, limit, fields))

    # -------------------------------------------------------------------------
    # Field metadata
    # -------------------------------------------------------------------------
    @mcp.tool(name="get-model-fields")
    async def get_model_fields(model: ModelName) -> str:
        """Get all fields and their properties for a given Odoo model.

        Each line shows name, label and type, plus "[required]" for required
        fields, "→ <model>" for relational fields, and the help text if any.
        """
        _log_request("get-model-fields", model=model)
        return _log_response("get-model-fields", await explorer.get_model_fields(model))

    @mcp.tool(name="get-related-models")
    async def get_related_models(model: ModelName) -> str:
        """List all related models for a given Odoo model (via many2one, one2many, many2many fields)."""
        _log_request("get-related-models", model=model)
        return _log_response("get-related-models", await explorer.get_related_models(model))

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------
    @mcp.tool(name="get-model-records")
    async def get_model_records(
        model: ModelName,
        limit: Annotated[int, Field(description="Number of records to return")],
        fields: FieldList = None,
    ) -> str:
        """Get a sample of records for a given Odoo model."""
        _log_request("get-model-records", model=model, limit=limit, fields=fields)
        return _log_response("get-model-records", await explorer.get_model_records(model, limit, fields))

    @mcp.tool(name="search-records")
    async def search_records(
        model: ModelName,
        domain: RecordDomain = None,
        fields: FieldList = None,
        limit: Annotated[Optional[int], Field(description="Number of records to return (default: 10)")] = None,
        offset: Annotated[Optional[int], Field(description="Number of records to skip (default: 0)")] = None,
        order: Annotated[
            Optional[str], Field(description='Sort order (e.g. "name ASC" or "create_date DESC")')
        ] = None,
    ) -> str:
        """Search for records in a given Odoo model with domain filters.

        Can fetch single or multiple records.  Limit is kept between 1 and
        1000; a negative offset is treated as 0.
        """
        _log_request(
            "search-records",
            model=model, domain=domain, fields=fields,
            limit=limit, offset=offset, order=order,
        )
        text = await explorer.search_records(model, domain, fields, limit, offset, order)
        return _log_response("search-records", text)

    @mcp.tool(name="count-records")
    async def count_records(model: ModelName, domain: RecordDomain = None) -> str:
        """Count the number of records matching a domain filter in a given Odoo model."""
        _log_request("count-records", model=model, domain=domain)
        return _log_response("count-records", await explorer.count_records(model, domain))

    @mcp.tool(name="get-record")
    async def get_record(
        model: ModelName,
        record_id: Annotated[int, Field(description="ID of the record to fetch")],
        fields: FieldList = None,
    ) -> str:
        """Fetch a specific record by ID from a given Odoo model."""
        _log_request("get-record", model=model, record_id=record_id, fields=fields)
        return _log_response("get-record", await explorer.get_record(model, record_id, fields))

    # -------------------------------------------------------------------------
    # Source code (best-effort GitHub lookup)
    # -------------------------------------------------------------------------
    @mcp.tool(name="get-model-methods")
    async def get_model_methods(
        model: ModelName,
        branch: Annotated[Optional[str], Field(description="Odoo branch to use (default: 18.0)")] = None,
    ) -> str:
        """List all public and private methods for a given Odoo model by searching the Odoo GitHub source."""
        _log_request("get-model-methods", model=model, branch=branch)
        _log_status("Searching odoo/odoo on GitHub")
        return _log_response("get-model-methods", await explorer.get_model_methods(model, branch))

    return mcp


# =============================================================================
# Module-level server
# =============================================================================
# Settings are read once, at import.  load_dotenv() must run first so values
# from a local .env file are visible to load_settings().
# =============================================================================
load_dotenv()
settings = load_settings()
mcp = create_server(OdooExplorer.from_settings(settings))


def main() -> None:
    logging.info(f"Starting Odoo MCP server for {settings.url} (db={settings.database})")
    mcp.run()


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    main()
