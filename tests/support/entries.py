"""Builders for raw entries used across tests."""

from __future__ import annotations

from indexsync.domain.model import (
    Collection,
    Entry,
    Reference,
    ReferenceList,
    Scalar,
    SystemEnvelope,
)

_TAGGED = (Scalar, Reference, ReferenceList, Collection)


def make_entry(
    entry_id: str,
    content_type: str | None = "page",
    fields: dict[str, dict[str, object]] | None = None,
    **metadata: object,
) -> Entry:
    """Entry whose plain field values are wrapped as scalars."""

    entry = Entry(
        sys=SystemEnvelope(
            id=entry_id,
            content_type=content_type,
            metadata={"id": entry_id, "type": "Entry", "revision": 1, **metadata},
        )
    )
    for name, localized in (fields or {}).items():
        entry.fields[name] = {
            code: value if isinstance(value, _TAGGED) else Scalar(value)
            for code, value in localized.items()
        }
    return entry
