"""Row-query descriptor entities consumed by query transports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FilterOperator(str, Enum):
    """Comparison operators supported in query filters."""

    EQUALS = "="
    NOT_EQUALS = "!="
    IN = "IN"


@dataclass(frozen=True)
class QueryFilter:
    """One conjunctive WHERE clause term."""

    field: str
    operator: FilterOperator
    values: tuple[str | None, ...]

    @staticmethod
    def equals(field: str, value: str | None) -> QueryFilter:
        return QueryFilter(field=field, operator=FilterOperator.EQUALS, values=(value,))

    @staticmethod
    def not_equals(field: str, value: str | None) -> QueryFilter:
        return QueryFilter(field=field, operator=FilterOperator.NOT_EQUALS, values=(value,))

    @staticmethod
    def is_in(field: str, *values: str) -> QueryFilter:
        return QueryFilter(field=field, operator=FilterOperator.IN, values=tuple(values))

    def render(self) -> str:
        if self.operator == FilterOperator.IN:
            rendered = ", ".join(_render_literal(value) for value in self.values)
            return f"{self.field} IN ({rendered})"
        return f"{self.field} {self.operator.value} {_render_literal(self.values[0])}"


@dataclass(frozen=True)
class SubqueryDescriptor:
    """Nested child-relationship query (for example `Fields` of an EntityDefinition)."""

    relationship: str
    fields: tuple[str, ...]

    def render(self) -> str:
        return f"(SELECT {', '.join(self.fields)} FROM {self.relationship})"


@dataclass(frozen=True)
class QueryDescriptor:
    """Input contract for one row-returning query.

    `name` identifies the query independently of its rendered statement so
    transports and tests can address result sets by purpose.
    """

    name: str
    source: str
    fields: tuple[str, ...]
    subqueries: tuple[SubqueryDescriptor, ...] = ()
    filters: tuple[QueryFilter, ...] = ()
    tooling: bool = False
    query_more: bool = True

    @property
    def statement(self) -> str:
        """Return the SOQL statement for this descriptor."""
        select_items = list(self.fields) + [subquery.render() for subquery in self.subqueries]
        statement = f"SELECT {', '.join(select_items)} FROM {self.source}"
        if self.filters:
            statement += " WHERE " + " AND ".join(item.render() for item in self.filters)
        return statement


def _render_literal(value: str | None) -> str:
    if value is None:
        return "null"
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"
