"""Locale flattening of nested, multi-locale entries.

One entry turns into one ``FlatRecord`` per locale fallback group:

1) bookkeeping keys are stripped from the envelope; nested entries lose
   their envelope entirely
2) every field resolves to the value of the first locale code of the group
   that carries one; fields without a value are left out
3) nested references resolve with the same group, recursively
4) an entry already on the current resolution path is emitted as a link stub
   instead of being descended into again
5) a ``contentType`` field is attached when the entry does not define one

The transform never writes to the input entries.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from indexsync.domain.model import (
    CONTENT_TYPE_FIELD,
    Collection,
    Entry,
    FlatRecord,
    Reference,
    ReferenceList,
    Scalar,
    link_stub,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from indexsync.domain.model import (
        FieldValue,
        LocaleCode,
        LocaleFallbacks,
        LocaleGroup,
        LocalizedField,
    )

log = getLogger(__name__)


def flatten_entry(entry: Entry, locales: LocaleFallbacks | None = None) -> list[FlatRecord]:
    """Return one record per fallback group in ``locales``.

    Without configured locales a single record is produced from an implicit
    group holding every locale code the entry uses, in first-seen order.
    """

    if locales:
        groups = tuple(tuple(group) for group in locales)
        if not all(groups):
            raise ValueError("Locale fallback groups must not be empty")
    else:
        groups = (tuple(entry.locale_codes()),)

    tag_codes = tuple(code for group in groups for code in group)
    metadata = entry.sys.stripped()

    records: list[FlatRecord] = []
    for group in groups:
        resolver = _LocaleResolver(group=group, tag_codes=tag_codes)
        records.append(
            FlatRecord(
                id=entry.id,
                locale=resolver.locale,
                fields=resolver.resolve_fields(entry, path=(entry,)),
                metadata=metadata,
            )
        )
    return records


def flatten_entries(
    entries: Iterable[Entry],
    locales: LocaleFallbacks | None = None,
) -> list[list[FlatRecord]]:
    """Flatten every entry, keeping the locale variants of one entry together."""

    return [flatten_entry(entry, locales) for entry in entries]


def tagged_fields(
    entry: Entry,
    tag_codes: Iterable[LocaleCode],
) -> Mapping[str, LocalizedField]:
    """Entry fields with a ``contentType`` tag under every code of ``tag_codes``."""

    if CONTENT_TYPE_FIELD in entry.fields:
        return entry.fields
    tag = Scalar(entry.content_type)
    return {**entry.fields, CONTENT_TYPE_FIELD: dict.fromkeys(tag_codes, tag)}


@dataclass(frozen=True, slots=True)
class _LocaleResolver:
    group: LocaleGroup
    tag_codes: tuple[LocaleCode, ...]

    @property
    def locale(self) -> LocaleCode:
        return self.group[0] if self.group else ""

    def resolve_fields(self, entry: Entry, *, path: tuple[Entry, ...]) -> dict[str, object]:
        resolved: dict[str, object] = {}
        for name, localized in tagged_fields(entry, self.tag_codes).items():
            value = self._pick(localized)
            if value is None:
                continue
            resolved[name] = self._resolve_value(value, path=path)
        return resolved

    def _pick(self, localized: LocalizedField) -> FieldValue | None:
        for code in self.group:
            value = localized.get(code)
            if value is None:
                continue
            if isinstance(value, Scalar) and value.value is None:
                continue
            return value
        return None

    def _resolve_value(self, value: FieldValue, *, path: tuple[Entry, ...]) -> object:
        if isinstance(value, Scalar):
            return copy.deepcopy(value.value)
        if isinstance(value, Reference):
            return self._resolve_nested(value.entry, path=path)
        if isinstance(value, ReferenceList):
            return [
                self._resolve_nested(item, path=path)
                if isinstance(item, Entry)
                else copy.deepcopy(item.value)
                for item in value.items
            ]
        if isinstance(value, Collection):
            resolved = copy.deepcopy(dict(value.extra))
            resolved["elements"] = [
                self._resolve_nested(element, path=path) for element in value.elements
            ]
            return resolved
        raise TypeError(f"Unsupported field value: {value!r}")

    def _resolve_nested(self, entry: Entry, *, path: tuple[Entry, ...]) -> dict[str, object]:
        if any(entry is visited for visited in path):
            log.debug("Reference cycle at entry %s, emitting link", entry.id)
            return link_stub(entry)
        resolved = self.resolve_fields(entry, path=(*path, entry))
        resolved["locale"] = self.locale
        return resolved
