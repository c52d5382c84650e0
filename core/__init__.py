# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the Odoo JSON-RPC bridge.
#
#   rpc_client  → one JSON-RPC call per invocation, RemoteError on `error`
#   session     → the single cached uid (login at most once)
#   query       → bounds and defaults for domain / fields / limit / offset
#   formatting  → raw Odoo results → tool text
#   explorer    → one coroutine per tool, with its error policy
#   source_search → best-effort method lookup on GitHub (not part of the bridge)
#
# Nothing in this package imports FastMCP or Google ADK.
# =============================================================================
