"""Translate Contentful entry payloads into the domain entry graph."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, cast

from indexsync.domain.model import (
    Collection,
    Entry,
    Reference,
    ReferenceList,
    Scalar,
    SystemEnvelope,
)

from .schema import EntryPayload

if TYPE_CHECKING:
    from collections.abc import Iterable

    from indexsync.domain.model import EntryId, FieldValue, LocalizedField

log = getLogger(__name__)


def translate_entries(
    payloads: Iterable[Mapping[str, object] | EntryPayload],
    *,
    resolve_links: bool = False,
) -> list[Entry]:
    """Build entries from sync items, keeping payload order.

    With ``resolve_links`` a link to an entry of the same batch becomes a
    reference to that entry, which may close a reference cycle. Links to
    anything else stay plain values.
    """

    validated = [
        payload if isinstance(payload, EntryPayload) else EntryPayload.model_validate(payload)
        for payload in payloads
    ]
    entries: dict[EntryId, Entry] = {}
    for payload in validated:
        if payload.sys.id in entries:
            log.warning("Duplicate entry %s in sync payload, keeping the last", payload.sys.id)
        entries[payload.sys.id] = Entry(sys=_envelope(payload.sys.model_dump(by_alias=True)))

    classifier = _ValueClassifier(entries if resolve_links else {})
    for payload in validated:
        entry = entries[payload.sys.id]
        entry.fields.update(classifier.fields(payload.fields))
    return list(entries.values())


def translate_entry(payload: Mapping[str, object] | EntryPayload) -> Entry:
    return translate_entries([payload])[0]


def _envelope(sys: Mapping[str, object]) -> SystemEnvelope:
    return SystemEnvelope(
        id=str(sys["id"]),
        content_type=_link_id(sys.get("contentType")),
        metadata={key: value for key, value in sys.items() if value is not None},
    )


def _link_id(value: object) -> str | None:
    if not isinstance(value, Mapping):
        return None
    sys = cast("Mapping[str, object]", value).get("sys")
    if not isinstance(sys, Mapping):
        return None
    link_id = cast("Mapping[str, object]", sys).get("id")
    return link_id if isinstance(link_id, str) else None


def _as_mapping(value: object) -> Mapping[str, object] | None:
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return None


class _ValueClassifier:
    """Sort raw JSON field values into the tagged field-value variants."""

    def __init__(self, linkable: Mapping[EntryId, Entry]) -> None:
        self._linkable = linkable

    def fields(self, raw_fields: Mapping[str, Mapping[str, object]]) -> dict[str, LocalizedField]:
        return {
            name: {code: self.classify(value) for code, value in localized.items()}
            for name, localized in raw_fields.items()
        }

    def classify(self, value: object) -> FieldValue:
        if isinstance(value, list):
            items = [self._entry_or_scalar(item) for item in cast("list[object]", value)]
            if any(isinstance(item, Entry) for item in items):
                return ReferenceList(items=tuple(items))
            return Scalar(value)

        mapping = _as_mapping(value)
        if mapping is None:
            return Scalar(value)

        elements = mapping.get("elements")
        if isinstance(elements, list):
            resolved = [self._entry_or_scalar(item) for item in cast("list[object]", elements)]
            if resolved and all(isinstance(item, Entry) for item in resolved):
                return Collection(
                    elements=tuple(cast("list[Entry]", resolved)),
                    extra={key: item for key, item in mapping.items() if key != "elements"},
                )
            return Scalar(value)

        entry = self._entry(mapping)
        return Reference(entry) if entry is not None else Scalar(value)

    def _entry_or_scalar(self, value: object) -> Entry | Scalar:
        mapping = _as_mapping(value)
        entry = self._entry(mapping) if mapping is not None else None
        return entry if entry is not None else Scalar(value)

    def _entry(self, mapping: Mapping[str, object]) -> Entry | None:
        sys = _as_mapping(mapping.get("sys"))
        if sys is None or not isinstance(sys.get("id"), str):
            return None

        if sys.get("type") == "Link":
            if sys.get("linkType") != "Entry":
                return None
            return self._linkable.get(cast("str", sys["id"]))

        raw_fields = _as_mapping(mapping.get("fields"))
        if raw_fields is None:
            return None
        entry = Entry(sys=_envelope(sys))
        entry.fields.update(
            self.fields(
                {
                    name: localized
                    for name, localized in cast("Mapping[str, object]", raw_fields).items()
                    if isinstance(localized, Mapping)
                }
            )
        )
        return entry
