"""Port for fetching raw entries from the content repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from indexsync.domain.model import Entry, EntryId


@runtime_checkable
class EntrySource(Protocol):
    """Content repository collaborator."""

    async def sync(
        self,
        *,
        entry_id: EntryId | None = None,
        initial: bool = True,
    ) -> Sequence[Entry]:
        """Return every entry of the repository, or the one named ``entry_id``."""
        ...


__all__ = ["EntrySource"]
