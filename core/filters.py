# core/filters.py
"""
Shared building blocks for paginated, filtered list queries.
"""
import math
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.sql.elements import ColumnElement

from core.validation import parse_identifier

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Keeps offset = (page - 1) * limit inside a 64-bit integer
MAX_PAGE = 2**31 - 1
MAX_LIMIT = 1000


@dataclass(frozen=True)
class PageParams:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_count(total: int, limit: int) -> int:
    """ceil(total / limit); an empty result has zero pages."""
    return math.ceil(total / limit) if total else 0


class RelationMode(str, Enum):
    EXACT = "exact"
    UNASSIGNED = "unassigned"
    ASSIGNED = "assigned"


@dataclass(frozen=True)
class RelationFilter:
    """Three-mode filter over a nullable foreign key column."""

    mode: RelationMode
    target_id: uuid.UUID | None = None

    @classmethod
    def parse(cls, raw: str | None, field_name: str) -> "RelationFilter | None":
        """
        Parse a query value: a UUID, "unassigned" or "assigned".

        Blank values mean "no filter". Anything else must be a well-formed
        identifier (MalformedIdentifierError otherwise).
        """
        if raw is None:
            return None
        value = raw.strip()
        if not value:
            return None
        keyword = value.lower()
        if keyword == RelationMode.UNASSIGNED.value:
            return cls(RelationMode.UNASSIGNED)
        if keyword == RelationMode.ASSIGNED.value:
            return cls(RelationMode.ASSIGNED)
        return cls(RelationMode.EXACT, parse_identifier(value, field_name))

    def condition(self, column) -> ColumnElement[bool]:
        if self.mode is RelationMode.UNASSIGNED:
            return column.is_(None)
        if self.mode is RelationMode.ASSIGNED:
            return column.is_not(None)
        return column == self.target_id


def search_condition(text: str | None, *columns) -> ColumnElement[bool] | None:
    """
    Case-insensitive substring match across `columns` (OR-ed).
    Returns None for an empty search.
    """
    if text is None or not text.strip():
        return None
    needle = text.strip()
    # % and _ in the search text match literally
    return or_(*(col.icontains(needle, autoescape=True) for col in columns))


def combine(conditions: list[Any]) -> ColumnElement[bool] | None:
    """AND together the non-empty conditions."""
    present = [c for c in conditions if c is not None]
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return and_(*present)


def apply_where(stmt: Select, condition: ColumnElement[bool] | None) -> Select:
    return stmt if condition is None else stmt.where(condition)


def count_query(entity_id_column, condition: ColumnElement[bool] | None) -> Select:
    """Count rows of the entity matching `condition` (filters only touch its own columns)."""
    return apply_where(select(func.count(entity_id_column)), condition)


def paginate(stmt: Select, params: PageParams) -> Select:
    return stmt.limit(params.limit).offset(params.offset)
