"""Domain primitives: scalar aliases shared by the sync core."""

from __future__ import annotations

type EntryId = str
type ContentTypeId = str
type LocaleCode = str
type ObjectID = str
type Fingerprint = str

# One fallback group is an ordered list of locale codes; the first code names
# the record produced for the group.
type LocaleGroup = tuple[LocaleCode, ...]
type LocaleFallbacks = tuple[LocaleGroup, ...]

CONTENT_TYPE_FIELD = "contentType"
