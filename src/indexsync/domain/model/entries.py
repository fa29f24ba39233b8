"""Source-side entry graph.

Field values are classified once, at ingestion, into a small tagged union so
the flattener never has to sniff shapes:

- ``Scalar``: any JSON value that is not a nested entry (links included)
- ``Reference``: one nested entry
- ``ReferenceList``: an array whose items are nested entries or scalars
- ``Collection``: a mapping carrying an ``elements`` array of nested entries

Entries compare by identity. Reference cycles are allowed in the graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from .primitives import ContentTypeId, EntryId, LocaleCode

# Envelope keys that only matter to the source repository.
BOOKKEEPING_KEYS = frozenset({"space", "contentType", "revision", "type"})


@dataclass(frozen=True, slots=True)
class SystemEnvelope:
    """The ``sys`` block of an entry, minus the content-type link."""

    id: EntryId
    content_type: ContentTypeId | None = None
    metadata: Mapping[str, object] = field(default_factory=dict["str", "object"])

    def stripped(self) -> dict[str, object]:
        """Envelope metadata without repository bookkeeping keys or ``id``."""

        return {
            key: value
            for key, value in self.metadata.items()
            if key not in BOOKKEEPING_KEYS and key != "id"
        }


@dataclass(frozen=True, slots=True)
class Scalar:
    value: object


@dataclass(frozen=True, slots=True)
class Reference:
    entry: Entry


@dataclass(frozen=True, slots=True)
class ReferenceList:
    items: tuple[Entry | Scalar, ...]


@dataclass(frozen=True, slots=True)
class Collection:
    elements: tuple[Entry, ...]
    extra: Mapping[str, object] = field(default_factory=dict["str", "object"])


type FieldValue = Scalar | Reference | ReferenceList | Collection
type LocalizedField = dict[LocaleCode, FieldValue]


@dataclass(eq=False, slots=True)
class Entry:
    """A raw entry as delivered by the content repository.

    ``fields`` maps field name to locale code to value. The mapping is filled
    after construction when entries reference each other, hence the class is
    not frozen; the flattener never writes to it.
    """

    sys: SystemEnvelope
    fields: dict[str, LocalizedField] = field(
        default_factory=dict["str", "LocalizedField"], repr=False
    )

    @property
    def id(self) -> EntryId:
        return self.sys.id

    @property
    def content_type(self) -> ContentTypeId | None:
        return self.sys.content_type

    def locale_codes(self) -> Iterator[LocaleCode]:
        """Yield every locale code used by the entry's fields, first-seen order."""

        seen: set[LocaleCode] = set()
        for localized in self.fields.values():
            for code in localized:
                if code not in seen:
                    seen.add(code)
                    yield code


def link_stub(entry: Entry) -> dict[str, object]:
    """Unresolved link representation of ``entry``."""

    return {"sys": {"type": "Link", "linkType": "Entry", "id": entry.id}}
