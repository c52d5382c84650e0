# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP server that exposes core/explorer.py as
# MCP tools.  Tool wrappers declare the parameter schema (FastMCP validates
# arguments before core/ runs), log the call, and return core's text.  They
# hold no Odoo logic and catch no exceptions.
# =============================================================================
