# =============================================================================
# agent/explorer_agent.py  —  Google ADK Agent over the Odoo MCP tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds a Google ADK agent that answers questions about an Odoo database.
#   The agent has no Odoo logic of its own: it reasons with an LLM (via
#   LiteLlm) and reaches Odoo only through the MCP tool server, which ADK
#   starts as a subprocess and talks to over stdio.
#
#     ADK Agent ──(LiteLlm)──▶ LLM
#         │
#         └──(MCP over stdio)──▶ tools/mcp_server.py ──▶ core/ ──▶ Odoo
#
# MCP CONNECTION:
#   The server is started as `python -m tools.mcp_server` from the project
#   root with the current interpreter and environment, so it sees the same
#   ODOO_* settings (including those loaded from .env) as this process.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_explorer_prompt
from core.config import OdooSettings


PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def server_parameters() -> StdioServerParameters:
    """How ADK launches the MCP tool server."""
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=dict(os.environ),
    )


def create_agent(settings: OdooSettings) -> Agent:
    """Create the Odoo explorer agent.

    Args:
        settings: Connection settings; the database name goes into the
            prompt and `explorer_model` selects the LiteLlm model
            (e.g. "openrouter/openai/gpt-4o").

    Returns:
        A configured Google ADK Agent instance.
    """
    mcp_tools = MCPToolset(connection_params=server_parameters())

    return Agent(
        name="odoo_model_explorer",
        model=LiteLlm(model=settings.explorer_model),
        instruction=get_explorer_prompt(settings.database),
        tools=[mcp_tools],
    )
