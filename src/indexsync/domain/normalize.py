"""Per-record manipulation and grouping of flattened records by content type."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from logging import getLogger
from typing import TYPE_CHECKING

from indexsync.domain.model import FlatRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from indexsync.domain.model import ContentTypeId

type ManipulateRecord = Callable[[FlatRecord, Sequence[FlatRecord]], FlatRecord]

log = getLogger(__name__)


class RecordManipulationError(ValueError):
    """Raised when a manipulation hook changes a record's identity."""


def manipulate_records(
    siblings: Sequence[FlatRecord],
    manipulate: ManipulateRecord,
) -> list[FlatRecord]:
    """Apply ``manipulate`` to every locale variant of one entry.

    Each call sees the record and the untouched variants of the same entry.
    """

    manipulated: list[FlatRecord] = []
    for record in siblings:
        result = manipulate(record, siblings)
        if not isinstance(result, FlatRecord):
            raise RecordManipulationError(
                f"Manipulation of {record.id}/{record.locale} returned {type(result).__name__}"
            )
        if (result.id, result.locale) != (record.id, record.locale):
            raise RecordManipulationError(
                f"Manipulation changed identity {record.id}/{record.locale} "
                f"to {result.id}/{result.locale}"
            )
        manipulated.append(result)
    return manipulated


def group_by_content_type(
    localized: Iterable[Sequence[FlatRecord]],
    manipulate: ManipulateRecord | None = None,
) -> dict[ContentTypeId, list[FlatRecord]]:
    """Group records by their ``contentType`` tag.

    ``localized`` yields the locale variants of one entry at a time.
    """

    grouped: dict[ContentTypeId, list[FlatRecord]] = {}
    for siblings in localized:
        records = manipulate_records(siblings, manipulate) if manipulate else list(siblings)
        for record in records:
            content_type = record.content_type
            if content_type is None:
                log.warning("Dropping record %s/%s without content type", record.id, record.locale)
                continue
            grouped.setdefault(content_type, []).append(record)
    return grouped
