# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Nursing Visits)
# Description: Parses Supabase HTTP responses into ExternalResponse.
# ============================================================================
"""Supabase response parser."""

import logging
from typing import Any

import httpx

from ....application.ports import ExternalResponse

logger = logging.getLogger(__name__)


class SupabaseResponseParser:
    """Maps HTTP responses of PostgREST and GoTrue to ExternalResponse."""

    def parse_rows(self, response: httpx.Response) -> ExternalResponse:
        if not response.is_success:
            return self.parse_error(response)
        if not response.content:
            return ExternalResponse.ok()
        try:
            body = response.json()
        except ValueError:
            logger.error("Data service returned a body that is not JSON")
            return ExternalResponse.error("INVALID_RESPONSE", "The data service returned an unreadable response")
        if isinstance(body, (list, dict)):
            return ExternalResponse.ok(body)
        return ExternalResponse.ok()

    def parse_count(self, response: httpx.Response) -> ExternalResponse:
        """Read the total from ``Content-Range: 0-24/3573`` (or ``*/0``)."""
        if not response.is_success:
            return self.parse_error(response)
        content_range = response.headers.get("content-range", "")
        _, _, total = content_range.partition("/")
        try:
            return ExternalResponse.ok({"count": int(total)})
        except ValueError:
            logger.error(f"Unexpected Content-Range header: {content_range!r}")
            return ExternalResponse.error("INVALID_RESPONSE", "The data service returned no count")

    def parse_error(self, response: httpx.Response) -> ExternalResponse:
        message = self.error_message(response)
        if response.status_code == 401:
            return ExternalResponse.error("AUTH_ERROR", message)
        logger.error(f"Data service error {response.status_code}: {message}")
        return ExternalResponse.error(f"HTTP_{response.status_code}", message)

    @staticmethod
    def error_message(response: httpx.Response) -> str:
        """Best message from PostgREST (`message`) or GoTrue (`error_description`, `msg`) bodies."""
        try:
            body: Any = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict):
            for key in ("error_description", "msg", "message", "error"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
        return response.text or f"HTTP {response.status_code}"
