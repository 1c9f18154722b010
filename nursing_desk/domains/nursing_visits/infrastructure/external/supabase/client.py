# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Nursing Visits)
# Description: Supabase REST (PostgREST) client implementation.
# ============================================================================
"""Supabase REST Client.

Async client for the hosted Postgres tables, exposed through PostgREST.

Components:
- PostgRESTQueryBuilder: Translates filters and ordering into params
- SupabaseResponseParser: Maps HTTP responses to ExternalResponse
- SupabaseAuthClient: Supplies the bearer token and receives 401s
"""

import logging
from typing import Any, Sequence

import httpx

from ....application.ports import Collection, ExternalResponse, OrderBy, QueryFilter
from .auth_client import SupabaseAuthClient
from .query_builder import PostgRESTQueryBuilder
from .response_parser import SupabaseResponseParser

logger = logging.getLogger(__name__)


class SupabaseRESTClient:
    """Implements IDataService against ``<project>/rest/v1``."""

    def __init__(
        self,
        rest_url: str,
        api_key: str,
        auth: SupabaseAuthClient | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        query_builder: PostgRESTQueryBuilder | None = None,
        response_parser: SupabaseResponseParser | None = None,
    ) -> None:
        """Initialize REST client.

        Args:
            rest_url: PostgREST endpoint, e.g. ``https://xyz.supabase.co/rest/v1``.
            api_key: Project anon key.
            auth: Auth client whose session token authorizes requests.
            timeout: Request timeout in seconds.
            transport: Optional custom httpx transport.
            query_builder: Optional custom query builder.
            response_parser: Optional custom response parser.
        """
        self.rest_url = rest_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

        self._auth = auth
        self._transport = transport
        self._builder = query_builder or PostgRESTQueryBuilder()
        self._parser = response_parser or SupabaseResponseParser()
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={"apikey": self.api_key, "Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        token = (self._auth.access_token if self._auth else None) or self.api_key
        headers = {"Authorization": f"Bearer {token}"}
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        collection: Collection,
        params: list[tuple[str, str]],
        json: dict[str, Any] | None = None,
        prefer: str | None = None,
    ) -> httpx.Response | ExternalResponse:
        """Send one request; transport failures come back as ExternalResponse."""
        client = await self._get_client()
        url = f"{self.rest_url}/{collection.value}"
        try:
            response = await client.request(method, url, params=params, json=json, headers=self._headers(prefer))
        except httpx.TimeoutException:
            logger.error(f"Timeout on {method} {collection.value}")
            return ExternalResponse.error("TIMEOUT", "The data service did not respond in time")
        except httpx.RequestError as e:
            logger.error(f"Request error on {method} {collection.value}: {e}")
            return ExternalResponse.error("CONNECTION_ERROR", "Could not reach the data service")

        if response.status_code == 401 and self._auth is not None:
            await self._auth.expire_session()
        return response

    # =========================================================================
    # IDataService implementation
    # =========================================================================

    async def query(
        self,
        collection: Collection,
        columns: str = "*",
        filters: Sequence[QueryFilter] = (),
        ordering: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> ExternalResponse:
        params = self._builder.build(columns=columns, filters=filters, ordering=ordering, limit=limit)
        response = await self._request("GET", collection, params)
        if isinstance(response, ExternalResponse):
            return response
        return self._parser.parse_rows(response)

    async def count(
        self,
        collection: Collection,
        filters: Sequence[QueryFilter] = (),
    ) -> ExternalResponse:
        params = self._builder.build(columns="id", filters=filters)
        response = await self._request("HEAD", collection, params, prefer="count=exact")
        if isinstance(response, ExternalResponse):
            return response
        return self._parser.parse_count(response)

    async def insert(self, collection: Collection, record: dict[str, Any]) -> ExternalResponse:
        response = await self._request("POST", collection, [], json=record, prefer="return=minimal")
        if isinstance(response, ExternalResponse):
            return response
        return self._parser.parse_rows(response)

    async def update(
        self,
        collection: Collection,
        patch: dict[str, Any],
        filters: Sequence[QueryFilter],
    ) -> ExternalResponse:
        params = self._builder.filter_params(filters)
        response = await self._request("PATCH", collection, params, json=patch, prefer="return=representation")
        if isinstance(response, ExternalResponse):
            return response
        return self._parser.parse_rows(response)
