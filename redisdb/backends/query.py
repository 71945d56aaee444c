##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Table queries and the in-memory query runner.

A `DBQuery` describes which rows of a table to return: a list of filters that must
all match, an ordering, an offset/limit window and an optional field projection.
Backends without a native query engine (such as Redis) load the candidate rows and
hand them to `query_in_memory`, which applies the query in Python.
"""

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Optional

from redisdb.exceptions import UnsupportedQueryOperatorError


LOG = logging.getLogger(__name__)

_MISSING = object()


def _contains(row_val: Any, val: Any) -> bool:
    return isinstance(row_val, (list, tuple, set)) and val in row_val


def _contains_any(row_val: Any, val: Any) -> bool:
    return isinstance(row_val, (list, tuple, set)) and any(v in row_val for v in val)


FILTER_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "==": lambda row_val, val: row_val == val,
    "!=": lambda row_val, val: row_val != val,
    "<": lambda row_val, val: row_val < val,
    "<=": lambda row_val, val: row_val <= val,
    ">": lambda row_val, val: row_val > val,
    ">=": lambda row_val, val: row_val >= val,
    "in": lambda row_val, val: row_val in val,
    "not-in": lambda row_val, val: row_val not in val,
    "array-contains": _contains,
    "array-contains-any": _contains_any,
}

# Operators that match rows where the field is absent
MATCH_MISSING_OPERATORS = ("!=", "not-in")


@dataclass
class DBQueryFilter:
    """
    A single `name op val` condition.

    Attributes:
        name: The field to compare.
        op: One of the keys of `FILTER_OPERATORS`.
        val: The value to compare against.
    """

    name: str
    op: str
    val: Any

    def matches(self, row: Dict) -> bool:
        """
        Check whether `row` satisfies this filter.

        Args:
            row: The row to check.

        Returns:
            True if the row matches, False otherwise.
        """
        row_val = row.get(self.name, _MISSING)
        if row_val is _MISSING:
            return self.op in MATCH_MISSING_OPERATORS
        try:
            return FILTER_OPERATORS[self.op](row_val, self.val)
        except TypeError:
            # Incomparable types (e.g. None < 3) never match
            return False


@dataclass
class DBQueryOrder:
    """
    A single ordering clause.

    Attributes:
        name: The field to order by.
        descending: Whether to sort in descending order.
    """

    name: str
    descending: bool = False


@dataclass
class DBQuery:
    """
    A query against a single table, built fluently:

        q = DBQuery("users").filter("age", ">=", 18).order("name").limit(10)

    Attributes:
        table: The table to query.
        filters: Conditions that must all hold.
        orders: Ordering clauses, applied in priority order.
        limit_value: The maximum number of rows to return (0 means unlimited).
        offset_value: The number of leading rows to skip.
        select_fields: If set, only these fields (plus `id`) are returned.
    """

    table: str
    filters: List[DBQueryFilter] = field(default_factory=list)
    orders: List[DBQueryOrder] = field(default_factory=list)
    limit_value: int = 0
    offset_value: int = 0
    select_fields: Optional[List[str]] = None

    def filter(self, name: str, op: str, val: Any) -> "DBQuery":
        if op not in FILTER_OPERATORS:
            raise UnsupportedQueryOperatorError(
                f"Unsupported filter operator '{op}'. Supported operators: {', '.join(FILTER_OPERATORS)}"
            )
        self.filters.append(DBQueryFilter(name, op, val))
        return self

    def filter_eq(self, name: str, val: Any) -> "DBQuery":
        return self.filter(name, "==", val)

    def order(self, name: str, descending: bool = False) -> "DBQuery":
        self.orders.append(DBQueryOrder(name, descending))
        return self

    def limit(self, limit: int) -> "DBQuery":
        self.limit_value = limit
        return self

    def offset(self, offset: int) -> "DBQuery":
        self.offset_value = offset
        return self

    def select(self, fields: List[str]) -> "DBQuery":
        self.select_fields = list(fields)
        return self

    def matches(self, row: Dict) -> bool:
        """
        Check whether `row` satisfies every filter of this query.

        Args:
            row: The row to check.

        Returns:
            True if all filters match, False otherwise.
        """
        return all(f.matches(row) for f in self.filters)

    def pretty(self) -> str:
        """
        Render the query in a short human readable form, for logging.
        """
        parts = [self.table]
        parts.extend(f"{f.name}{f.op}{f.val!r}" for f in self.filters)
        parts.extend(f"order by {o.name}{' desc' if o.descending else ''}" for o in self.orders)
        if self.offset_value:
            parts.append(f"offset {self.offset_value}")
        if self.limit_value:
            parts.append(f"limit {self.limit_value}")
        return " ".join(parts)


def _compare_values(a: Any, b: Any) -> int:
    try:
        return (a > b) - (a < b)
    except TypeError:
        # Incomparable types are grouped by type name
        a_type, b_type = type(a).__name__, type(b).__name__
        return (a_type > b_type) - (a_type < b_type)


def _sort_rows(rows: List[Dict], orders: List[DBQueryOrder]) -> List[Dict]:
    # Python's sort is stable, so applying the clauses from lowest to highest
    # priority yields a multi-key sort. Missing/None values go first ascending.
    compare = cmp_to_key(_compare_values)
    for order in reversed(orders):
        present = [r for r in rows if r.get(order.name) is not None]
        missing = [r for r in rows if r.get(order.name) is None]
        present.sort(key=lambda r, name=order.name: compare(r[name]), reverse=order.descending)
        rows = present + missing if order.descending else missing + present
    return rows


def query_in_memory(q: DBQuery, rows: Iterable[Dict]) -> List[Dict]:
    """
    Apply `q` to `rows` in Python.

    Filters are applied first, then ordering, offset, limit and finally the field
    projection. The input rows are never mutated.

    Args:
        q: The query to apply.
        rows: The candidate rows, e.g. every row of `q.table`.

    Returns:
        The matching rows.
    """
    result = [row for row in rows if q.matches(row)]

    if q.orders:
        result = _sort_rows(result, q.orders)

    if q.offset_value:
        result = result[q.offset_value :]

    if q.limit_value:
        result = result[: q.limit_value]

    if q.select_fields is not None:
        fields = set(q.select_fields) | {"id"}
        result = [{k: v for k, v in row.items() if k in fields} for row in result]

    LOG.debug(f"In-memory query '{q.pretty()}' returned {len(result)} rows.")
    return result
