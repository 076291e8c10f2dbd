"""
Metrics and orderings derived from retrieved result sets.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Union

NO_ATTENDANCE = "--"

# Plain decimal notation only; exponents are rejected
_NUMBER = re.compile(r"[+-]?\d{1,38}(\.\d{0,38})?")


def to_int(value: Any) -> int:
    """Integer value of a number stored as string or number; 0 when it does not parse."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, Decimal):
        return int(value) if value.is_finite() and value.adjusted() < 38 else 0

    text = str(value).strip()
    if not _NUMBER.fullmatch(text):
        return 0
    try:
        return int(Decimal(text))
    except InvalidOperation:
        return 0


def overall_attendance(rows: Iterable[Dict[str, Any]]) -> Union[int, str]:
    """
    Percentage of rows whose Status is "present" (any case), rounded half up.
    Returns "--" when there are no rows.
    """
    rows = list(rows)
    total = len(rows)
    if total == 0:
        return NO_ATTENDANCE
    present = sum(1 for row in rows if str(row.get("Status") or "").lower() == "present")
    return math.floor(present * 100 / total + 0.5)


def sort_numeric(items: Iterable[Dict[str, Any]], field: str) -> List[Dict[str, Any]]:
    return sorted(items, key=lambda item: to_int(item.get(field)))


def _parse_timestamp(value: Any):
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value).strip().replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        return None


def sort_by_date_desc(items: Iterable[Dict[str, Any]], field: str) -> List[Dict[str, Any]]:
    """Newest first; documents with a missing or unparseable date go last."""
    dated = []
    undated = []
    for item in items:
        parsed = _parse_timestamp(item.get(field))
        if parsed is None:
            undated.append(item)
        else:
            dated.append((parsed, item))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in dated] + undated
