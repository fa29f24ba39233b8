"""Port for the destination search index."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Mapping, Sequence

    from indexsync.domain.model import ObjectID

type IndexDocument = Mapping[str, object]


@runtime_checkable
class SearchIndex(Protocol):
    """Destination index collaborator.

    ``browse`` streams every stored document, one page at a time. The bulk
    operations return the object identifiers they affected.
    """

    name: str

    def browse(self) -> AsyncIterator[Sequence[IndexDocument]]: ...

    async def add_objects(self, documents: Sequence[IndexDocument]) -> list[ObjectID]: ...

    async def save_objects(self, documents: Sequence[IndexDocument]) -> list[ObjectID]: ...

    async def delete_objects(self, object_ids: Sequence[ObjectID]) -> list[ObjectID]: ...


type SearchIndexFactory = Callable[[str], SearchIndex]


__all__ = ["IndexDocument", "SearchIndex", "SearchIndexFactory"]
