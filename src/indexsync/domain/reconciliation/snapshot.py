"""Single-flight cache of the full contents of a search index."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from indexsync.domain.model import IndexHit

if TYPE_CHECKING:
    from indexsync.domain.ports import SearchIndex

log = getLogger(__name__)


class IndexSnapshot:
    """Lazily fetched, read-only view of every document in ``index``.

    The first call to :meth:`hits` starts one browse of the whole index;
    concurrent and later callers await that same fetch. A failed fetch stays
    failed for the lifetime of the snapshot.
    """

    def __init__(self, index: SearchIndex) -> None:
        self._index = index
        self._fetch: asyncio.Future[tuple[IndexHit, ...]] | None = None

    @property
    def index(self) -> SearchIndex:
        return self._index

    @property
    def fetched(self) -> bool:
        return self._fetch is not None

    async def hits(self) -> tuple[IndexHit, ...]:
        if self._fetch is None:
            self._fetch = asyncio.ensure_future(self._browse_all())
        # shield: one cancelled waiter must not cancel the shared fetch
        return await asyncio.shield(self._fetch)

    async def _browse_all(self) -> tuple[IndexHit, ...]:
        log.info("Fetching snapshot of index %s", self._index.name)
        hits: list[IndexHit] = []
        pages = 0
        try:
            async for page in self._index.browse():
                pages += 1
                hits.extend(IndexHit.from_document(document) for document in page)
        except Exception:
            log.exception("Snapshot of index %s failed after %d pages", self._index.name, pages)
            raise
        log.info("Fetched %d hits from index %s in %d pages", len(hits), self._index.name, pages)
        return tuple(hits)
