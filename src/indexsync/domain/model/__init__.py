"""Public domain model surface."""

from __future__ import annotations

from indexsync.domain.model.entries import (
    BOOKKEEPING_KEYS,
    Collection,
    Entry,
    FieldValue,
    LocalizedField,
    Reference,
    ReferenceList,
    Scalar,
    SystemEnvelope,
    link_stub,
)
from indexsync.domain.model.primitives import (
    CONTENT_TYPE_FIELD,
    ContentTypeId,
    EntryId,
    Fingerprint,
    LocaleCode,
    LocaleFallbacks,
    LocaleGroup,
    ObjectID,
)
from indexsync.domain.model.records import OBJECT_ID_KEY, FlatRecord, IndexHit, SyncBatch

__all__ = [  # noqa: RUF022
    # primitives
    "CONTENT_TYPE_FIELD",
    "ContentTypeId",
    "EntryId",
    "Fingerprint",
    "LocaleCode",
    "LocaleFallbacks",
    "LocaleGroup",
    "ObjectID",
    # entries
    "BOOKKEEPING_KEYS",
    "Collection",
    "Entry",
    "FieldValue",
    "LocalizedField",
    "Reference",
    "ReferenceList",
    "Scalar",
    "SystemEnvelope",
    "link_stub",
    # records
    "OBJECT_ID_KEY",
    "FlatRecord",
    "IndexHit",
    "SyncBatch",
]
