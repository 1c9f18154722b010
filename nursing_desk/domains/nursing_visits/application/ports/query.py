# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Backend-neutral query description shared by ports and adapters.
# ============================================================================
"""Query description types.

Use cases describe what they want with these small value types; the
adapter translates them into its own dialect.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Collection(str, Enum):
    """Remote collections used by the practice."""

    PATIENTS = "patients"
    APPOINTMENTS = "appointments"
    PATIENT_RECORDS = "patient_records"
    NURSES = "nurses"


class FilterOperator(str, Enum):
    EQ = "eq"
    ILIKE = "ilike"  # Case-insensitive substring match
    OR = "or"  # Any of the nested filters


@dataclass(frozen=True)
class QueryFilter:
    """A single column predicate, or a disjunction of predicates."""

    column: str = ""
    operator: FilterOperator = FilterOperator.EQ
    value: Any = None
    any_of: tuple["QueryFilter", ...] = field(default_factory=tuple)

    @classmethod
    def eq(cls, column: str, value: Any) -> "QueryFilter":
        return cls(column=column, operator=FilterOperator.EQ, value=value)

    @classmethod
    def ilike(cls, column: str, term: str) -> "QueryFilter":
        return cls(column=column, operator=FilterOperator.ILIKE, value=term)

    @classmethod
    def or_(cls, *filters: "QueryFilter") -> "QueryFilter":
        return cls(operator=FilterOperator.OR, any_of=tuple(filters))


@dataclass(frozen=True)
class OrderBy:
    column: str
    ascending: bool = True
