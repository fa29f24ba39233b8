"""HTTP client for the Contentful Sync API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from indexsync.adapters.http_resilience import ResilientClient
from indexsync.config.contentful import ContentfulConfig, get_contentful_config
from indexsync.domain.ports import EntrySource

from .schema import ErrorResponse, SyncPage
from .translator import translate_entries

if TYPE_CHECKING:
    from indexsync.adapters.http_resilience import ClientFactory
    from indexsync.domain.model import Entry, EntryId

log = getLogger(__name__)


class ContentfulAPIError(RuntimeError):
    """Raised when the Contentful API returns an error payload."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_id = error_id


@dataclass(slots=True)
class ContentfulSource:
    """Entry source backed by the Contentful Sync API.

    An initial sync walks every ``nextPageUrl``; the final ``nextSyncUrl`` is
    kept so a later call with ``initial=False`` returns only changes.
    """

    config: ContentfulConfig = field(default_factory=get_contentful_config)
    client_factory: ClientFactory = field(default=ResilientClient)
    next_sync_url: str | None = field(default=None, init=False)

    async def sync(
        self,
        *,
        entry_id: EntryId | None = None,
        initial: bool = True,
    ) -> list[Entry]:
        items = await self.fetch_sync_items(entry_id=entry_id, initial=initial)
        entries = translate_entries(items, resolve_links=self.config.resolve_links)
        if entry_id is not None:
            entries = [entry for entry in entries if entry.id == entry_id]
        log.info("Contentful sync returned %d entries", len(entries))
        return entries

    async def fetch_sync_items(
        self,
        *,
        entry_id: EntryId | None = None,
        initial: bool = True,
    ) -> list[dict[str, Any]]:
        url: str
        params: dict[str, str] | None
        if initial:
            url = f"/spaces/{self.config.space_id}/environments/{self.config.environment}/sync"
            params = {"initial": "true", "type": "Entry"}
            if entry_id is not None:
                params["sys.id"] = entry_id
        else:
            if self.next_sync_url is None:
                raise ValueError("Delta sync requested before an initial sync")
            url, params = self.next_sync_url, None

        items: list[dict[str, Any]] = []
        pages = 0
        async with self.client_factory(self.config.resilience) as client:
            while True:
                page = await self._perform_request(client=client, url=url, params=params)
                pages += 1
                items.extend(item for item in page.items if _is_entry_item(item))
                if page.next_page_url is None:
                    self.next_sync_url = page.next_sync_url
                    break
                url, params = page.next_page_url, None

        log.debug("Fetched %d sync items in %d pages", len(items), pages)
        return items

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        url: str,
        params: dict[str, str] | None,
    ) -> SyncPage:
        response = await client.get(
            url,
            params=params,
            headers={"Authorization": f"Bearer {self.config.access_token}"},
        )
        if response.is_error:
            _raise_api_error(response)

        payload = response.json()
        try:
            return SyncPage.model_validate(payload)
        except ValidationError as exc:
            raise ContentfulAPIError("Unexpected Contentful sync payload") from exc


def _is_entry_item(item: dict[str, Any]) -> bool:
    sys = item.get("sys")
    return isinstance(sys, dict) and sys.get("type") == "Entry"


def _raise_api_error(response: httpx.Response) -> None:
    try:
        error = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        response.raise_for_status()
        raise
    log.error(
        "Contentful API error %s (%s): %s",
        error.sys.id,
        response.status_code,
        error.message,
    )
    raise ContentfulAPIError(
        error.message or error.sys.id,
        status_code=response.status_code,
        error_id=error.sys.id,
    ) from None


if TYPE_CHECKING:
    _source_check: EntrySource = ContentfulSource()
