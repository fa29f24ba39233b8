"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from indexsync.adapters.algolia import AlgoliaIndex
from indexsync.adapters.contentful import ContentfulSource
from indexsync.config import (
    get_algolia_config,
    get_contentful_config,
    get_locale_fallbacks,
)
from indexsync.domain.data_integration import ContentSync, SyncReport

if TYPE_CHECKING:
    from collections.abc import Sequence

    from indexsync.domain.data_integration import RecordObserver
    from indexsync.domain.model import ContentTypeId, EntryId, LocaleFallbacks
    from indexsync.domain.normalize import ManipulateRecord
    from indexsync.domain.ports import EntrySource, SearchIndexFactory


log = getLogger(__name__)


def build_content_sync(
    *,
    source: EntrySource | None = None,
    index_factory: SearchIndexFactory | None = None,
    locales: LocaleFallbacks | None = None,
) -> ContentSync:
    """Wire the orchestrator with Contentful/Algolia adapters unless given others."""

    effective_source = source or ContentfulSource(config=get_contentful_config())
    effective_factory = index_factory or partial(AlgoliaIndex, config=get_algolia_config())
    return ContentSync(
        source=effective_source,
        index_factory=effective_factory,
        locales=locales if locales is not None else get_locale_fallbacks(),
    )


def sync_content(
    content_types: ContentTypeId | Sequence[ContentTypeId],
    index_name: str,
    *,
    observer: RecordObserver | None = None,
    entry_id: EntryId | None = None,
    manipulate: ManipulateRecord | None = None,
    dry_run: bool = False,
    sync: ContentSync | None = None,
) -> SyncReport:
    """Synchronise content types into an index using the configured adapters."""

    effective_sync = sync or build_content_sync()
    log.info(
        "Starting sync: content_types=%s, index=%s, entry_id=%s, dry_run=%s",
        content_types,
        index_name,
        entry_id,
        dry_run,
    )

    report = asyncio.run(
        effective_sync.run(
            content_types,
            index_name,
            observer=observer,
            entry_id=entry_id,
            manipulate=manipulate,
            dry_run=dry_run,
        )
    )

    log.info(
        f"Finished sync into {report.index_name}: fetched={report.fetched}, "
        f"types={len(report.results)}, failed={report.failed or 'none'}"
    )
    return report
