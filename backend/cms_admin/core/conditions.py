"""Query condition builder for admin list endpoints.

Turns the raw query string of a list request into a ``Condition``: the
predicates to filter on, the ordering and the page window. The condition
is plain data; ``resource_repo`` turns it into SQL.

Each filterable field is declared with a ``FilterSpec`` naming the query
key, the model column, how to match (exact or substring) and how to
coerce the raw string (as-is, ``"true"`` -> bool, or integer). A filter is
applied only when its query key is present and non-empty.

Paging follows the historical client contract: ``currentPage`` and
``pageSize`` are read as numbers, their absolute value is taken, and a
result of zero (or anything that is not a number) falls back to the
default. Values above the configured maximum fall back as well, which
keeps LIMIT and OFFSET within range.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cms_admin.db.exceptions import RecordValidationError

logger = logging.getLogger(__name__)

DEFAULT_CURRENT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_CURRENT_PAGE = 1_000_000
MAX_PAGE_SIZE = 1000

# Largest value of a 32-bit signed INTEGER column.
MAX_INTEGER = 2**31 - 1


class MatchKind(str, Enum):
    """How a filter value is compared against its column."""

    EXACT = "exact"
    CONTAINS = "contains"


class Coercion(str, Enum):
    """How a raw query-string value is converted before matching."""

    IDENTITY = "identity"
    BOOLEAN = "boolean"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class FilterSpec:
    """A filterable field of a resource."""

    param: str
    column: str
    match: MatchKind = MatchKind.EXACT
    coercion: Coercion = Coercion.IDENTITY


@dataclass(frozen=True)
class Predicate:
    """A single column comparison."""

    column: str
    match: MatchKind
    value: Any


@dataclass
class Condition:
    """Filter, ordering and pagination for one list query."""

    current_page: int = DEFAULT_CURRENT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    where: list[Predicate] = field(default_factory=list)
    order_by: list[tuple[str, str]] = field(default_factory=lambda: [("id", "desc")])

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def parse_page_number(raw: str | None, default: int, maximum: int | None = None) -> int:
    """Read a paging parameter as ``abs(number)``.

    Falls back to ``default`` when the value is missing, not a number,
    zero, or larger than ``maximum``.
    """
    if raw is None:
        return default
    try:
        number = float(raw)
    except ValueError:
        return default
    if not math.isfinite(number):
        return default
    number = int(abs(number))
    if maximum is not None and number > maximum:
        return default
    return number or default


def parse_record_id(raw: str) -> int | None:
    """Parse a path id. Only plain ASCII digits within the id column range count."""
    if not (raw.isascii() and raw.isdigit()):
        return None
    pk = int(raw)
    if not 1 <= pk <= MAX_INTEGER:
        return None
    return pk


def coerce_value(filter_spec: FilterSpec, raw: str) -> Any:
    """Convert a raw query value according to the filter's coercion."""
    if filter_spec.coercion is Coercion.BOOLEAN:
        return raw == "true"
    if filter_spec.coercion is Coercion.NUMERIC:
        digits = raw[1:] if raw.startswith("-") else raw
        if not (digits.isascii() and digits.isdigit()):
            raise RecordValidationError([f"{filter_spec.param}: must be an integer"])
        value = int(raw)
        if abs(value) > MAX_INTEGER:
            raise RecordValidationError([f"{filter_spec.param}: must be between -{MAX_INTEGER} and {MAX_INTEGER}"])
        return value
    return raw


def build_condition(
    query: Mapping[str, str],
    filters: Sequence[FilterSpec],
    *,
    combine: bool = True,
    default_current_page: int = DEFAULT_CURRENT_PAGE,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_current_page: int = MAX_CURRENT_PAGE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> Condition:
    """Build a ``Condition`` from query-string values.

    Args:
        query: Query-string keys mapped to their (last) string value.
        filters: Filterable fields of the resource, in declaration order.
        combine: AND every supplied filter together. When False only the
            last supplied filter (in declaration order) is kept, as the
            legacy admin clients expect.
        default_current_page: Page used when ``currentPage`` is missing,
            zero, not a number or above ``max_current_page``.
        default_page_size: Page size used when ``pageSize`` is missing,
            zero, not a number or above ``max_page_size``.

    Raises:
        RecordValidationError: A numeric filter value is not an integer
            or is out of the integer column range.
    """
    predicates: list[Predicate] = []
    for filter_spec in filters:
        raw = query.get(filter_spec.param)
        if not raw:
            continue
        predicates.append(Predicate(filter_spec.column, filter_spec.match, coerce_value(filter_spec, raw)))

    if not combine:
        predicates = predicates[-1:]

    condition = Condition(
        current_page=parse_page_number(query.get("currentPage"), default_current_page, max_current_page),
        page_size=parse_page_number(query.get("pageSize"), default_page_size, max_page_size),
        where=predicates,
    )
    logger.debug(
        "Built condition page=%d size=%d predicates=%s",
        condition.current_page,
        condition.page_size,
        [(p.column, p.match.value) for p in predicates],
    )
    return condition
