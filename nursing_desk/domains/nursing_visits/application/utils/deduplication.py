"""Identity-keyed de-duplication of fetched rows.

A join against patients can return the same appointment more than once.
Keep the first occurrence, drop the rest, preserve order.
"""

from typing import Iterable, TypeVar

from nursing_desk.core.domain.entities import Entity

TEntity = TypeVar("TEntity", bound=Entity)


def unique_by_id(items: Iterable[TEntity]) -> list[TEntity]:
    seen: set[object] = set()
    unique: list[TEntity] = []
    for item in items:
        if item.id is not None:
            if item.id in seen:
                continue
            seen.add(item.id)
        unique.append(item)
    return unique
