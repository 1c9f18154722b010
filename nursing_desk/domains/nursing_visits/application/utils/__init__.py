"""Application utilities for the Nursing Visits domain."""

from .deduplication import unique_by_id
from .response_extractor import ResponseExtractor

__all__ = ["ResponseExtractor", "unique_by_id"]
