"""Application service driving one content-to-index sync run."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from indexsync.domain.flatten import flatten_entries
from indexsync.domain.normalize import group_by_content_type
from indexsync.domain.reconciliation import IndexSnapshot, commit_batch, diff_records

if TYPE_CHECKING:
    from collections.abc import Sequence

    from indexsync.domain.model import (
        ContentTypeId,
        Entry,
        EntryId,
        FlatRecord,
        LocaleFallbacks,
        ObjectID,
        SyncBatch,
    )
    from indexsync.domain.normalize import ManipulateRecord
    from indexsync.domain.ports import EntrySource, SearchIndexFactory

type RecordObserver = Callable[[ContentTypeId, list[FlatRecord]], None]

log = getLogger(__name__)


@dataclass(slots=True)
class ContentTypeResult:
    """Outcome of one content type's pipeline."""

    content_type: ContentTypeId
    records: int
    batch: SyncBatch | None = None
    object_ids: list[ObjectID] = field(default_factory=list["ObjectID"])
    committed: bool = False
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class SyncReport:
    """Outcome of a sync run across content types."""

    index_name: str
    fetched: int
    results: dict[ContentTypeId, ContentTypeResult] = field(
        default_factory=dict["ContentTypeId", "ContentTypeResult"]
    )

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results.values())

    @property
    def failed(self) -> list[ContentTypeId]:
        return [name for name, result in self.results.items() if not result.ok]


class ContentSync:
    """Push entries of selected content types from the source into an index.

    Every content type runs through its own pipeline (diff, then commit)
    concurrently with the others. The pipelines of one run share one snapshot
    of the index, fetched at most once; every run takes a fresh snapshot, so
    an instance can be reused for later runs.
    """

    def __init__(
        self,
        *,
        source: EntrySource,
        index_factory: SearchIndexFactory,
        locales: LocaleFallbacks | None = None,
    ) -> None:
        self._source = source
        self._index_factory = index_factory
        self._locales = locales

    async def run(
        self,
        content_types: ContentTypeId | Sequence[ContentTypeId],
        index_name: str,
        *,
        observer: RecordObserver | None = None,
        entry_id: EntryId | None = None,
        manipulate: ManipulateRecord | None = None,
        dry_run: bool = False,
    ) -> SyncReport:
        """Sync ``content_types`` into ``index_name``.

        ``observer`` sees each content type's records before they are indexed
        and may edit the list in place. A source failure aborts the run; an
        observer or pipeline failure is logged and reported for its content
        type only.
        """

        wanted = {content_types} if isinstance(content_types, str) else set(content_types)
        try:
            entries = await self._source.sync(entry_id=entry_id, initial=True)
        except Exception:
            log.exception("Fetching entries for %s failed", ", ".join(sorted(wanted)))
            raise

        selected = _select_entries(entries, wanted, entry_id)
        grouped = group_by_content_type(flatten_entries(selected, self._locales), manipulate)
        log.info(
            "Fetched %d entries, %d selected for %s",
            len(entries),
            len(selected),
            ", ".join(sorted(grouped)) or "no content types",
        )

        report = SyncReport(index_name=index_name, fetched=len(entries))
        snapshot = IndexSnapshot(self._index_factory(index_name))
        pipelines: list[asyncio.Task[None]] = []
        for content_type, records in grouped.items():
            result = ContentTypeResult(content_type=content_type, records=len(records))
            report.results[content_type] = result
            if observer is not None:
                try:
                    observer(content_type, records)
                except Exception as exc:
                    log.exception("Observer failed for type %s", content_type)
                    result.error = exc
                    continue
                result.records = len(records)
            pipelines.append(
                asyncio.create_task(
                    self._index_content_type(
                        result,
                        records,
                        snapshot=snapshot,
                        entry_id=entry_id,
                        dry_run=dry_run,
                    )
                )
            )

        await asyncio.gather(*pipelines)
        return report

    async def _index_content_type(
        self,
        result: ContentTypeResult,
        records: list[FlatRecord],
        *,
        snapshot: IndexSnapshot,
        entry_id: EntryId | None,
        dry_run: bool,
    ) -> None:
        content_type = result.content_type
        index_name = snapshot.index.name
        try:
            hits = await snapshot.hits()
            if entry_id is not None:
                # a single-entry run must not delete the rest of the type
                hits = tuple(hit for hit in hits if hit.id == entry_id)
            result.batch = diff_records(records, hits, content_type)
            if dry_run:
                log.info("Dry run for type %s: %s", content_type, result.batch.summary())
                return
            result.object_ids = await commit_batch(snapshot.index, result.batch)
            result.committed = True
        except Exception as exc:
            log.exception("Indexing type %s into %s failed", content_type, index_name)
            result.error = exc
            return
        log.info("Indexed type: %s (%s)", content_type, result.batch.summary())


def _select_entries(
    entries: Sequence[Entry],
    content_types: set[ContentTypeId],
    entry_id: EntryId | None,
) -> list[Entry]:
    return [
        entry
        for entry in entries
        if entry.content_type in content_types and (entry_id is None or entry.id == entry_id)
    ]
