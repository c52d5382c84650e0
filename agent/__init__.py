# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the optional Google ADK agent that answers questions
# about an Odoo database by calling the MCP tools in tools/mcp_server.py.
#
#   agent/ → orchestration only (prompt + tool connection)
#   tools/ → MCP wrappers only
#   core/  → the JSON-RPC bridge
# =============================================================================
