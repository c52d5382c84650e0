# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the bridge)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that flows
# between a tool call and the Odoo JSON-RPC endpoint.  They carry no network
# behavior; the RPC client, session manager and formatters all speak in these
# types.
#
# REMOTE DATA IS LOOSELY TYPED:
#   Odoo returns records and field metadata as plain JSON objects whose keys
#   depend on the model and on the requested field list.  We keep them as
#   mappings (OdooRecord / FieldMetadata) and let each formatter project only
#   the attributes it needs.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


# A single value inside an Odoo record: scalars, False for "empty", or a
# nested reference such as [id, "display name"] for many2one fields.
OdooValue = Union[str, int, float, bool, None, list, dict]
OdooRecord = dict[str, OdooValue]
FieldMetadata = dict[str, Any]

# A domain is a list of (field, operator, value) triples and "&" / "|" / "!"
# connector tokens.  The bridge never looks inside it.
DomainClause = Union[list, tuple, str]
Domain = list[DomainClause]


class Service(str, Enum):
    """The two JSON-RPC services the bridge talks to."""

    COMMON = "common"    # login
    OBJECT = "object"    # execute_kw → model methods


# -----------------------------------------------------------------------------
# RemoteCall — one JSON-RPC "call" invocation
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RemoteCall:
    """Immutable descriptor of a single remote call.

    `args` is the positional list sent as params.args; for execute_kw it is
    [db, uid, password, model, method, positional, keywords].
    """

    service: Service
    method: str
    args: tuple = ()

    def params(self) -> dict:
        return {
            "service": self.service.value,
            "method": self.method,
            "args": list(self.args),
        }


# -----------------------------------------------------------------------------
# QueryOptions — normalized keyword arguments for search_read / read
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class QueryOptions:
    """Bounded, defaulted query parameters ready to forward to Odoo.

    `limit` is None only for operations that send no limit at all (read by
    id).  `offset` and `order` stay None when the caller did not supply them,
    which lets Odoo apply its own defaults.
    """

    fields: Optional[tuple[str, ...]] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    order: Optional[str] = None

    def as_kwargs(self) -> dict:
        """Keyword dict for execute_kw; absent options are omitted."""
        kwargs: dict[str, Any] = {}
        if self.fields is not None:
            kwargs["fields"] = list(self.fields)
        if self.limit is not None:
            kwargs["limit"] = self.limit
        if self.offset is not None:
            kwargs["offset"] = self.offset
        if self.order is not None:
            kwargs["order"] = self.order
        return kwargs


# -----------------------------------------------------------------------------
# ErrorPolicy — what a tool does when its remote call fails
# -----------------------------------------------------------------------------
# Tools are deliberately not uniform here: three render remote errors
# as text, the rest let them fail the tool call.  The inconsistency is kept
# and made explicit per tool.
# -----------------------------------------------------------------------------
class ErrorPolicy(str, Enum):
    DEGRADE_TO_TEXT = "degrade-to-text"
    PROPAGATE = "propagate"


TOOL_POLICIES: dict[str, ErrorPolicy] = {
    "list-odoo-models": ErrorPolicy.PROPAGATE,
    "get-model-fields": ErrorPolicy.PROPAGATE,
    "get-model-records": ErrorPolicy.PROPAGATE,
    "search-model": ErrorPolicy.PROPAGATE,
    "search-records": ErrorPolicy.DEGRADE_TO_TEXT,
    "count-records": ErrorPolicy.DEGRADE_TO_TEXT,
    "get-record": ErrorPolicy.DEGRADE_TO_TEXT,
    "get-related-models": ErrorPolicy.PROPAGATE,
}


# -----------------------------------------------------------------------------
# MethodLookup — result of the auxiliary source-code method search
# -----------------------------------------------------------------------------
@dataclass
class ClassMethods:
    """Methods found for one class definition in one source file."""

    file: str
    public_methods: list[str] = field(default_factory=list)
    private_methods: list[str] = field(default_factory=list)


@dataclass
class MethodLookup:
    """Outcome of `MethodSource.find_methods_for_model`.

    Exactly one of the three shapes is meaningful:
      - `error` set: the search itself could not be performed
      - `files_found` == 0: the search ran but had no hits
      - `matches`: per-file method lists (may be empty if no file had the class)
    """

    class_name: str
    branch: str
    files_found: int = 0
    matches: list[ClassMethods] = field(default_factory=list)
    error: Optional[str] = None
