"""Flat, locale-resolved records and their index counterparts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, cast

from .primitives import CONTENT_TYPE_FIELD

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .primitives import ContentTypeId, EntryId, LocaleCode, ObjectID

OBJECT_ID_KEY = "objectID"


@dataclass(frozen=True, slots=True, kw_only=True)
class FlatRecord:
    """One entry resolved for one locale fallback group.

    ``fields`` holds locale-resolved values only; fields without a value in
    the group are absent. ``metadata`` carries the retained envelope keys
    (``createdAt``, ``updatedAt`` and friends).
    """

    id: EntryId
    locale: LocaleCode
    fields: Mapping[str, object] = field(default_factory=dict["str", "object"])
    metadata: Mapping[str, object] = field(default_factory=dict["str", "object"])
    object_id: ObjectID | None = None

    @property
    def content_type(self) -> ContentTypeId | None:
        value = self.fields.get(CONTENT_TYPE_FIELD)
        return value if isinstance(value, str) else None

    def to_document(self) -> dict[str, object]:
        """Render the JSON document stored in the search index."""

        document: dict[str, object] = {**self.metadata, **self.fields}
        document["id"] = self.id
        document["locale"] = self.locale
        if self.object_id is not None:
            document[OBJECT_ID_KEY] = self.object_id
        return document


@dataclass(frozen=True, slots=True)
class IndexHit:
    """A document as currently stored in the search index."""

    document: Mapping[str, object]

    @property
    def object_id(self) -> ObjectID:
        return cast("ObjectID", self.document[OBJECT_ID_KEY])

    @property
    def id(self) -> EntryId | None:
        value = self.document.get("id")
        return value if isinstance(value, str) else None

    @property
    def locale(self) -> LocaleCode | None:
        value = self.document.get("locale")
        return value if isinstance(value, str) else None

    @property
    def content_type(self) -> ContentTypeId | None:
        value = self.document.get(CONTENT_TYPE_FIELD)
        return value if isinstance(value, str) else None

    @classmethod
    def from_document(cls, document: Mapping[str, object]) -> IndexHit:
        if not isinstance(document.get(OBJECT_ID_KEY), str):
            raise ValueError(f"Index document without {OBJECT_ID_KEY}: {document!r}")
        return cls(document=dict(document))


@dataclass(slots=True)
class SyncBatch:
    """Outcome of one diff pass: what to add, save and delete."""

    created: list[FlatRecord] = field(default_factory=list["FlatRecord"])
    updated: list[FlatRecord] = field(default_factory=list["FlatRecord"])
    deleted: list[ObjectID] = field(default_factory=list["ObjectID"])

    @property
    def is_empty(self) -> bool:
        return not (self.created or self.updated or self.deleted)

    def summary(self) -> str:
        return (
            f"created={len(self.created)}, updated={len(self.updated)}, "
            f"deleted={len(self.deleted)}"
        )
