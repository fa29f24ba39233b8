"""Apply a sync batch to the search index as three concurrent bulk calls."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from indexsync.domain.model import ObjectID, SyncBatch
    from indexsync.domain.ports import SearchIndex

log = getLogger(__name__)


class BulkOperationError(RuntimeError):
    """Raised when one of the bulk add/save/delete calls fails."""

    def __init__(self, message: str, *, operation: str, index_name: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.index_name = index_name


async def commit_batch(index: SearchIndex, batch: SyncBatch) -> list[ObjectID]:
    """Add, save and delete concurrently; return every affected object id.

    An empty set issues no call. The operations are not rolled back when a
    sibling fails: every call settles first, then the first failure surfaces
    as :class:`BulkOperationError`.
    """

    results = await asyncio.gather(
        _run(index, "add", index.add_objects, [r.to_document() for r in batch.created]),
        _run(index, "save", index.save_objects, [r.to_document() for r in batch.updated]),
        _run(index, "delete", index.delete_objects, list(batch.deleted)),
        return_exceptions=True,
    )
    object_ids: list[ObjectID] = []
    for result in results:
        if isinstance(result, BaseException):
            raise result
        object_ids.extend(result)
    log.info("Committed to index %s: %s", index.name, batch.summary())
    return object_ids


async def _run[T](
    index: SearchIndex,
    operation: str,
    call: Callable[[Sequence[T]], Awaitable[list[ObjectID]]],
    payload: Sequence[T],
) -> list[ObjectID]:
    if not payload:
        return []
    try:
        return await call(payload)
    except Exception as exc:
        log.exception(
            "Bulk %s of %d objects on index %s failed", operation, len(payload), index.name
        )
        raise BulkOperationError(
            f"Bulk {operation} on index {index.name} failed: {exc}",
            operation=operation,
            index_name=index.name,
        ) from exc
