"""Reconciliation core: bring a search index in line with flattened records.

Flow for one content type:
1) fetch the index snapshot once (shared by every content type of a run)
2) diff incoming records against the snapshot by ``(id, locale)`` fingerprint
3) commit created/updated/deleted as three concurrent bulk operations
"""

from __future__ import annotations

from .commit import BulkOperationError, commit_batch
from .diff import diff_records
from .snapshot import IndexSnapshot

__all__ = [
    "BulkOperationError",
    "IndexSnapshot",
    "commit_batch",
    "diff_records",
]
