"""Public interface for the Algolia adapter."""

from __future__ import annotations

from .client import AlgoliaAPIError, AlgoliaIndex
from .schema import BatchResponse, BrowsePage

__all__ = [
    "AlgoliaAPIError",
    "AlgoliaIndex",
    "BatchResponse",
    "BrowsePage",
]
