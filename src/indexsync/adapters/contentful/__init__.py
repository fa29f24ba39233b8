"""Public interface for the Contentful adapter."""

from __future__ import annotations

from .client import ContentfulAPIError, ContentfulSource
from .schema import EntryPayload, SyncPage
from .translator import translate_entries, translate_entry

__all__ = [
    "ContentfulAPIError",
    "ContentfulSource",
    "EntryPayload",
    "SyncPage",
    "translate_entries",
    "translate_entry",
]
