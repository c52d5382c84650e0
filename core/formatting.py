# =============================================================================
# core/formatting.py  —  Result Formatter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Renders raw Odoo results as the text a tool returns.  Two styles:
#     a) one line per item from a fixed projection (models, fields, relations)
#     b) JSON dumps of whole records (compact or indented)
#
#   Every formatter reads only the keys it names with .get(), so a record or
#   field-metadata mapping missing an attribute still renders.  Formatters
#   never raise on remote data.
# =============================================================================

import json
from typing import Iterable, Mapping

from core.models import ClassMethods, FieldMetadata, MethodLookup, OdooRecord
from core.query import RELATIONAL_TYPES


NO_RECORDS = "No records found."
NO_MATCHING_RECORDS = "No records found matching the criteria."
NO_RELATED_MODELS = "No related models found."
NO_FIELDS = "No fields found."
RECORD_SEPARATOR = "\n---\n"


def dump_compact(record: OdooRecord) -> str:
    return json.dumps(record, separators=(",", ":"), ensure_ascii=False)


def dump_pretty(record: OdooRecord) -> str:
    return json.dumps(record, indent=2, ensure_ascii=False)


# =============================================================================
# Projection-style formatters
# =============================================================================
def format_model_list(models: Iterable[OdooRecord]) -> str:
    lines = [f"{m.get('model')}: {m.get('name')}" for m in models]
    return "\n".join(lines) if lines else NO_RECORDS


def format_field(name: str, meta: FieldMetadata) -> str:
    """One field: `name: Label (type) [required] → relation` plus help."""
    line = f"{name}: {meta.get('string')} ({meta.get('type')})"
    if meta.get("required"):
        line += " [required]"
    if meta.get("relation"):
        line += f" → {meta['relation']}"
    if meta.get("help"):
        line += f"\n  help: {meta['help']}"
    return line


def format_fields(fields: Mapping[str, FieldMetadata]) -> str:
    lines = [format_field(name, meta) for name, meta in fields.items()]
    return "\n".join(lines) if lines else NO_FIELDS


def format_related_models(fields: Mapping[str, FieldMetadata]) -> str:
    related = [
        f"{name}: {meta.get('type')} → {meta.get('relation')}"
        for name, meta in fields.items()
        if meta.get("type") in RELATIONAL_TYPES and meta.get("relation")
    ]
    return "\n".join(related) if related else NO_RELATED_MODELS


# =============================================================================
# Record dumps
# =============================================================================
def format_record_lines(records: Iterable[OdooRecord]) -> str:
    """Compact JSON, one record per line (get-model-records, search-model)."""
    lines = [dump_compact(rec) for rec in records]
    return "\n".join(lines) if lines else NO_RECORDS


def format_search_results(records: list) -> str:
    body = RECORD_SEPARATOR.join(dump_pretty(rec) for rec in records) if records else NO_MATCHING_RECORDS
    return f"Found {len(records)} record(s):\n\n{body}"


def format_count(model: str, count: int, filtered: bool) -> str:
    suffix = " matching the domain filter" if filtered else ""
    return f"Found {count} record(s) in {model}{suffix}."


def format_record(model: str, record_id: int, records: list) -> str:
    if not records:
        return f"No record found with ID {record_id} in model {model}"
    return dump_pretty(records[0])


# =============================================================================
# Method lookup
# =============================================================================
def _format_class_methods(class_name: str, total: int, found: ClassMethods) -> str:
    public = "\n".join(found.public_methods) if found.public_methods else "(none)"
    private = "\n".join(found.private_methods) if found.private_methods else "(none)"
    return (
        f"{total} - Class: {class_name}\nFile: {found.file}\n"
        f"Public methods:\n{public}\n\nPrivate methods:\n{private}"
    )


def format_method_lookup(lookup: MethodLookup) -> str:
    if lookup.error is not None:
        return f"Could not search for class {lookup.class_name} in Odoo repo: {lookup.error}"
    if lookup.files_found == 0:
        return f"No files found for class {lookup.class_name} in Odoo repo."
    if not lookup.matches:
        return f"Class {lookup.class_name} not found in any candidate files."
    total = len(lookup.matches)
    return "\n\n---\n\n".join(
        _format_class_methods(lookup.class_name, total, found) for found in lookup.matches
    )
