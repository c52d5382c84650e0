# =============================================================================
# core/query.py  —  Query Normalizer
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the raw, user-supplied query parameters of a tool call (domain,
#   field list, limit, offset, order) into a bounded QueryOptions that is
#   safe to forward to Odoo.  Pure functions, no I/O.
#
# THE TWO LIMIT FAMILIES:
#   - General search (search-records):  default 10, clamped into [1, 1000].
#   - Sampling / model search (get-model-records, search-model):  a falsy
#     limit becomes 5 and there is no upper bound.
#   The asymmetry is long-standing tool behavior and stays as is
#   until someone confirms which behavior is wanted.
# =============================================================================

from typing import Iterable, Optional

from core.models import Domain, QueryOptions


MIN_LIMIT = 1
MAX_LIMIT = 1000
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_SAMPLE_LIMIT = 5

MODEL_REGISTRY = "ir.model"

# Columns returned by search-model when the caller asks for none.
IR_MODEL_FIELDS: tuple[str, ...] = (
    "id",
    "model",
    "name",
    "state",
    "abstract",
    "transient",
    "modules",
    "info",
    "count",
    "create_date",
    "write_date",
    "display_name",
)

LIST_MODELS_FIELDS: tuple[str, ...] = ("model", "name")

FIELD_ATTRIBUTES: tuple[str, ...] = ("string", "type", "required", "readonly", "help", "relation")
RELATION_ATTRIBUTES: tuple[str, ...] = ("string", "type", "relation")
RELATIONAL_TYPES = frozenset({"many2one", "one2many", "many2many"})


# =============================================================================
# Single-parameter rules
# =============================================================================
def normalize_domain(domain: Optional[Domain]) -> Domain:
    """An absent domain means "match all", i.e. an empty list."""
    return list(domain) if domain else []


def normalize_fields(fields: Optional[Iterable[str]]) -> Optional[tuple[str, ...]]:
    """Pass a non-empty field list through; otherwise omit it (all fields)."""
    if not fields:
        return None
    return tuple(fields)


def clamp_limit(limit: Optional[int], default: int = DEFAULT_SEARCH_LIMIT) -> int:
    """Default an absent limit and clamp a supplied one into [1, 1000]."""
    if limit is None:
        return default
    return max(MIN_LIMIT, min(MAX_LIMIT, int(limit)))


def clamp_offset(offset: Optional[int]) -> Optional[int]:
    """Negative offsets become 0; an absent offset stays absent."""
    if offset is None:
        return None
    return max(0, int(offset))


def sample_limit(limit: Optional[int]) -> int:
    """Falsy limits become 5; no upper bound."""
    if not limit:
        return DEFAULT_SAMPLE_LIMIT
    return max(MIN_LIMIT, int(limit))


# =============================================================================
# Per-tool option sets
# =============================================================================
def list_models_options() -> QueryOptions:
    return QueryOptions(fields=LIST_MODELS_FIELDS)


def sample_options(limit: Optional[int], fields: Optional[Iterable[str]] = None) -> QueryOptions:
    """Options for get-model-records."""
    return QueryOptions(fields=normalize_fields(fields), limit=sample_limit(limit))


def model_search_options(limit: Optional[int], fields: Optional[Iterable[str]] = None) -> QueryOptions:
    """Options for search-model: canonical ir.model columns unless told otherwise."""
    return QueryOptions(
        fields=normalize_fields(fields) or IR_MODEL_FIELDS,
        limit=sample_limit(limit),
    )


def search_options(
    fields: Optional[Iterable[str]] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    order: Optional[str] = None,
) -> QueryOptions:
    """Options for search-records."""
    return QueryOptions(
        fields=normalize_fields(fields),
        limit=clamp_limit(limit),
        offset=clamp_offset(offset),
        order=order or None,
    )


def read_options(fields: Optional[Iterable[str]] = None) -> QueryOptions:
    """Options for get-record (read by id): fields only, never a limit."""
    return QueryOptions(fields=normalize_fields(fields))
