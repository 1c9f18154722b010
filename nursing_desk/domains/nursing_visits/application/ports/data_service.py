# ============================================================================
# SCOPE: APPLICATION LAYER (Nursing Visits)
# Description: Data service port.
# ============================================================================
"""Data Service Port.

Minimum capability surface of the hosted data service: ordered queries,
counts, inserts and filtered updates against the practice's collections.
"""

from typing import TYPE_CHECKING, Any, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from .query import Collection, OrderBy, QueryFilter
    from .response import ExternalResponse


@runtime_checkable
class IDataService(Protocol):
    """Interface for table access.

    Implementations: SupabaseRESTClient
    """

    async def query(
        self,
        collection: "Collection",
        columns: str = "*",
        filters: Sequence["QueryFilter"] = (),
        ordering: Sequence["OrderBy"] = (),
        limit: int | None = None,
    ) -> "ExternalResponse":
        """Fetch rows.

        Args:
            collection: Collection to read.
            columns: Column selection, may embed related collections
                (e.g. ``"id, patients(first_name, last_name)"``).
            filters: Predicates, all of which must hold.
            ordering: Sort keys applied in order.
            limit: Maximum number of rows, None for all.

        Returns:
            ExternalResponse with a list of row dicts or error.
        """
        ...

    async def count(
        self,
        collection: "Collection",
        filters: Sequence["QueryFilter"] = (),
    ) -> "ExternalResponse":
        """Count rows matching all filters.

        Returns:
            ExternalResponse with ``{"count": n}`` or error.
        """
        ...

    async def insert(self, collection: "Collection", record: dict[str, Any]) -> "ExternalResponse":
        """Insert one row.

        Returns:
            ExternalResponse with success or error.
        """
        ...

    async def update(
        self,
        collection: "Collection",
        patch: dict[str, Any],
        filters: Sequence["QueryFilter"],
    ) -> "ExternalResponse":
        """Apply ``patch`` to rows matching all filters.

        Returns:
            ExternalResponse whose data, when present, lists the updated rows.
        """
        ...

    async def close(self) -> None:
        """Close connections and release resources."""
        ...
