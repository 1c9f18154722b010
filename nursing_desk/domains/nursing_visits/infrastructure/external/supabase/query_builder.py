# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Nursing Visits)
# Description: Translates QueryFilter/OrderBy into PostgREST query params.
# ============================================================================
"""PostgREST query parameter builder."""

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Sequence

from ....application.ports.query import FilterOperator, OrderBy, QueryFilter

# Characters with meaning inside PostgREST logical expressions
RESERVED_CHARS = set(',.:()" \\')


class PostgRESTQueryBuilder:
    """Builds the query string of a PostgREST request.

    Example:
        >>> builder = PostgRESTQueryBuilder()
        >>> builder.build(columns="*", filters=[QueryFilter.eq("status", "Scheduled")], limit=5)
        [('select', '*'), ('status', 'eq.Scheduled'), ('limit', '5')]
    """

    def build(
        self,
        columns: str | None = None,
        filters: Sequence[QueryFilter] = (),
        ordering: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if columns is not None:
            params.append(("select", "".join(columns.split())))
        params.extend(self.filter_params(filters))
        if ordering:
            params.append(("order", ",".join(self.order_term(order) for order in ordering)))
        if limit is not None:
            params.append(("limit", str(limit)))
        return params

    def filter_params(self, filters: Sequence[QueryFilter]) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        for query_filter in filters:
            if query_filter.operator == FilterOperator.OR:
                inner = ",".join(self.logical_term(f) for f in query_filter.any_of)
                params.append(("or", f"({inner})"))
            else:
                params.append((query_filter.column, self.condition(query_filter, quote=False)))
        return params

    def logical_term(self, query_filter: QueryFilter) -> str:
        """``column.op.value`` form used inside ``or=(...)``."""
        if query_filter.operator == FilterOperator.OR:
            inner = ",".join(self.logical_term(f) for f in query_filter.any_of)
            return f"or({inner})"
        return f"{query_filter.column}.{self.condition(query_filter, quote=True)}"

    def condition(self, query_filter: QueryFilter, quote: bool) -> str:
        if query_filter.operator == FilterOperator.EQ:
            if query_filter.value is None:
                return "is.null"
            value = self.format_value(query_filter.value)
            return f"eq.{self.quote(value) if quote else value}"
        if query_filter.operator == FilterOperator.ILIKE:
            pattern = f"*{self.like_term(self.format_value(query_filter.value))}*"
            return f"ilike.{self.quote(pattern) if quote else pattern}"
        raise ValueError(f"Unsupported filter operator: {query_filter.operator}")

    @staticmethod
    def like_term(term: str) -> str:
        """Make user input match literally inside an ilike pattern.

        PostgREST rewrites every ``*`` to ``%`` and has no escape for it, so a
        typed ``*`` can only be narrowed to a single-character wildcard.
        """
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return escaped.replace("*", "_")

    @staticmethod
    def order_term(order: OrderBy) -> str:
        return f"{order.column}.{'asc' if order.ascending else 'desc'}"

    @staticmethod
    def format_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (date, datetime, time)):
            return value.isoformat()
        if isinstance(value, Enum):
            return str(value.value)
        return str(value)

    @staticmethod
    def quote(value: str) -> str:
        if not any(char in RESERVED_CHARS for char in value):
            return value
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
