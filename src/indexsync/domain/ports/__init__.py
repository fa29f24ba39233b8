"""Domain port definitions for adapters."""

from __future__ import annotations

from .indexing import IndexDocument, SearchIndex, SearchIndexFactory
from .sources import EntrySource

__all__ = [
    "EntrySource",
    "IndexDocument",
    "SearchIndex",
    "SearchIndexFactory",
]
