import logging
from datetime import datetime, timezone
from typing import Any, Dict

from string_analyzer.analysis import compute_properties
from string_analyzer.errors import NotFoundError
from string_analyzer.filters import apply_filters
from string_analyzer.nlp import parse_natural_query
from string_analyzer.schemas import AnalyzedString, FilterSpec
from string_analyzer.store import StringStore

logger = logging.getLogger("string_analyzer.services")


def create_string(value: str, store: StringStore) -> AnalyzedString:
    props = compute_properties(value)
    record = AnalyzedString(
        id=props.sha256_hash,
        value=value,
        properties=props,
        created_at=datetime.now(timezone.utc),
    )
    store.add(record)
    logger.info("Stored string %s (length=%d)", record.id, props.length)
    return record


def get_string(value: str, store: StringStore) -> AnalyzedString:
    """Lookup record by hashing the exact provided string value."""
    record = store.get_by_value(value)
    if record is None:
        raise NotFoundError("String does not exist in the system")
    return record


def delete_string(value: str, store: StringStore) -> None:
    record = get_string(value, store)
    store.delete(record.id)
    logger.info("Deleted string %s", record.id)


def list_strings(store: StringStore, spec: FilterSpec) -> Dict[str, Any]:
    data = apply_filters(store.list(), spec)
    return {
        "data": data,
        "count": len(data),
        "filters_applied": spec.applied(),
    }


def filter_by_natural_language(store: StringStore, query: str) -> Dict[str, Any]:
    spec = parse_natural_query(query)
    logger.debug("Interpreted %r as %s", query, spec.applied())
    data = apply_filters(store.list(), spec)
    return {
        "data": data,
        "count": len(data),
        "interpreted_query": {
            "original": query,
            "parsed_filters": spec.applied(),
        },
    }
