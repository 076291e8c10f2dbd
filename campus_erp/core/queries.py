"""
Partition-key queries, sort-key prefix queries, point reads and filtered
scans over the document store.

Prefix matching is plain string matching on the sort key, so every prefix is
terminated with the key delimiter: semester "1" becomes "1#" and can never
match a "10#..." sort key.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from campus_erp.database import DocumentStore
from campus_erp.tables import KEY_DELIMITER, Table

logger = logging.getLogger(__name__)


def sort_prefix(value: Any) -> str:
    return f"{value}{KEY_DELIMITER}"


def query_by_partition(
    store: DocumentStore,
    table: Table,
    partition_value: Any,
    descending: bool = False,
) -> List[Dict[str, Any]]:
    items = store.query(table, partition_value, descending=descending)
    logger.info(f"Query {table.name} {table.partition_key}={partition_value}: {len(items)} items")
    return items


def query_by_partition_and_sort_prefix(
    store: DocumentStore,
    table: Table,
    partition_value: Any,
    prefix: Any,
) -> List[Dict[str, Any]]:
    """Documents in one partition whose sort key begins with `"<prefix>#"`."""
    items = store.query(table, partition_value, sort_prefix=sort_prefix(prefix))
    logger.info(f"Query {table.name} {table.partition_key}={partition_value} prefix={prefix!r}: {len(items)} items")
    return items


def get_by_key(store: DocumentStore, table: Table, key: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    return store.get(table, key)


def first_in_partition(store: DocumentStore, table: Table, partition_value: Any) -> Optional[Dict[str, Any]]:
    items = store.query(table, partition_value)
    return items[0] if items else None


def scan_with_filter(store: DocumentStore, table: Table, **equals: Any) -> List[Dict[str, Any]]:
    """
    Full-table scan keeping documents whose attributes equal every keyword
    argument. Unordered; an empty result is not an error.
    """
    items = store.scan(table, equals or None)
    logger.info(f"Scan {table.name} filters={equals}: {len(items)} items")
    return items


def filter_equals_ignore_case(items: List[Dict[str, Any]], field: str, value: Optional[str]) -> List[Dict[str, Any]]:
    """In-memory case-insensitive equality filter that keeps the input order."""
    if not value:
        return items
    wanted = value.strip().lower()
    return [item for item in items if str(item.get(field) or "").lower() == wanted]
