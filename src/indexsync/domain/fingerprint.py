"""Content-addressed keys shared by incoming records and index hits."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from indexsync.domain.model import EntryId, Fingerprint, FlatRecord, IndexHit, LocaleCode


def fingerprint(entry_id: EntryId, locale: LocaleCode) -> Fingerprint:
    """Return the hex SHA-256 of ``entry_id`` followed by ``locale``.

    The two values are fed as separate updates into one digest. Documents
    already stored in an index were keyed this way, so the order must not
    change.
    """

    digest = hashlib.sha256()
    digest.update(entry_id.encode("utf-8"))
    digest.update(locale.encode("utf-8"))
    return digest.hexdigest()


def record_fingerprint(record: FlatRecord) -> Fingerprint:
    return fingerprint(record.id, record.locale)


def hit_fingerprint(hit: IndexHit) -> Fingerprint | None:
    """Fingerprint of an index hit, or ``None`` when it lacks ``id``/``locale``."""

    if hit.id is None or hit.locale is None:
        return None
    return fingerprint(hit.id, hit.locale)
