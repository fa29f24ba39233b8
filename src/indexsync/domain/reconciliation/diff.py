"""Fingerprint-based diff between incoming records and an index snapshot."""

from __future__ import annotations

import dataclasses
from logging import getLogger
from typing import TYPE_CHECKING

from indexsync.domain.fingerprint import hit_fingerprint, record_fingerprint
from indexsync.domain.model import SyncBatch

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from indexsync.domain.model import ContentTypeId, Fingerprint, FlatRecord, IndexHit, ObjectID

log = getLogger(__name__)


def diff_records(
    records: Sequence[FlatRecord],
    hits: Iterable[IndexHit],
    content_type: ContentTypeId | None = None,
) -> SyncBatch:
    """Classify ``records`` against ``hits`` into created/updated/deleted.

    A record matching a hit gets the hit's ``objectID``; it is updated when
    its document differs from the stored one and left alone otherwise. Hits
    without a matching record are deleted only when ``content_type`` narrows
    the snapshot, since an unfiltered snapshot also holds unrelated types.
    Fields absent from a record never count as equal to a stored value.
    """

    if content_type is not None:
        hits = [hit for hit in hits if hit.content_type == content_type]

    incoming: dict[Fingerprint, FlatRecord] = {}
    for record in records:
        incoming[record_fingerprint(record)] = record
    if len(incoming) != len(records):
        # last one wins
        log.warning(
            "Diff dropped %d records with duplicate (id, locale)",
            len(records) - len(incoming),
        )

    matched: dict[Fingerprint, ObjectID] = {}
    batch = SyncBatch()
    for hit in hits:
        key = hit_fingerprint(hit)
        record = incoming.get(key) if key is not None else None
        if key is None or record is None or key in matched:
            if content_type is not None:
                batch.deleted.append(hit.object_id)
            continue

        matched[key] = hit.object_id
        attached = dataclasses.replace(record, object_id=hit.object_id)
        incoming[key] = attached
        if attached.to_document() != dict(hit.document):
            batch.updated.append(attached)

    batch.created = [record for record in incoming.values() if record.object_id is None]

    log.debug("Diff for %s: %s", content_type or "all types", batch.summary())
    return batch
