"""
Read‑only views over product records.

The helpers here take a sequence of records (normally the result of
``ProductStore.list_all``) and derive filtered, searched, paginated
or aggregated results from it.  None of them modify their input.

Page and limit values arrive from query strings, so they are parsed
leniently: an optional sign and a leading run of digits is read and
anything after it ignored (``"3abc"`` is 3, ``"2.9"`` is 2).  A value
that is missing, unparsable or not positive falls back to its default
(page 1, limit equal to the number of records), so a slice range is
never negative.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from product_catalog_api.app.core.errors import InvalidInputError
from product_catalog_api.app.schemas.product import ProductRead

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class Page:
    """A window of records plus the numbers used to compute it."""

    page: int
    limit: int
    total: int
    items: List[ProductRead] = field(default_factory=list)


def parse_positive_int(value: Any, default: int) -> int:
    """Parse ``value`` as a positive integer, falling back to ``default``.

    Integers are used as they are; strings are read up to the first
    character that is not part of a leading integer.  Booleans, zero,
    negative numbers and anything unparsable yield ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value) if math.isfinite(value) else 0
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return default
        parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def filter_by_category(records: Sequence[ProductRead], category: Optional[str]) -> List[ProductRead]:
    """Return records whose category equals ``category`` exactly.

    Matching is case sensitive.  An empty or missing category returns
    every record in its original order.
    """
    if not category:
        return list(records)
    return [r for r in records if r.category == category]


def paginate(records: Sequence[ProductRead], page: Any = None, limit: Any = None) -> Page:
    """Cut one page out of ``records``.

    ``total`` is the number of records before slicing.
    """
    total = len(records)
    page_number = parse_positive_int(page, 1)
    page_size = parse_positive_int(limit, total)
    start = (page_number - 1) * page_size
    end = start + page_size
    return Page(page=page_number, limit=page_size, total=total, items=list(records[start:end]))


def search_by_name(records: Sequence[ProductRead], query: Optional[str]) -> List[ProductRead]:
    """Return records whose name contains ``query``, ignoring case.

    An empty query matches every record.  ``None`` means the caller
    did not supply a query at all and raises ``InvalidInputError``.
    """
    if query is None:
        raise InvalidInputError("Query parameter 'q' is required")
    needle = query.lower()
    return [r for r in records if needle in r.name.lower()]


def aggregate_by_category(records: Sequence[ProductRead]) -> Dict[str, int]:
    """Count records per category.  Only categories present appear."""
    stats: Dict[str, int] = {}
    for record in records:
        stats[record.category] = stats.get(record.category, 0) + 1
    return stats
