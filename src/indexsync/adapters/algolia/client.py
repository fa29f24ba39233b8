"""Search index adapter for the Algolia REST API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from pydantic import ValidationError

from indexsync.adapters.http_resilience import ResilientClient
from indexsync.config.algolia import AlgoliaConfig, get_algolia_config
from indexsync.domain.model import OBJECT_ID_KEY
from indexsync.domain.ports import SearchIndex

from .schema import (
    AlgoliaBaseModel,
    BatchPayload,
    BatchRequest,
    BatchResponse,
    BrowsePage,
    ErrorResponse,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    import httpx

    from indexsync.adapters.http_resilience import ClientFactory
    from indexsync.domain.model import ObjectID
    from indexsync.domain.ports import IndexDocument

    from .schema import BatchAction

log = getLogger(__name__)

BROWSE_HITS_PER_PAGE = 1000


class AlgoliaAPIError(RuntimeError):
    """Raised when Algolia rejects a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class AlgoliaIndex:
    """One Algolia index, addressed by its unprefixed ``index`` name."""

    index: str
    config: AlgoliaConfig = field(default_factory=get_algolia_config)
    client_factory: ClientFactory = field(default=ResilientClient)

    @property
    def name(self) -> str:
        return self.config.index_name(self.index)

    @property
    def _path(self) -> str:
        return f"/1/indexes/{quote(self.name, safe='')}"

    async def browse(self) -> AsyncIterator[list[dict[str, Any]]]:
        body: dict[str, Any] = {"params": f"hitsPerPage={BROWSE_HITS_PER_PAGE}"}
        async with self.client_factory(self.config.resilience_config()) as client:
            while True:
                payload = await self._perform_request(
                    client=client, path=f"{self._path}/browse", body=body
                )
                page = _validate(BrowsePage, payload)
                yield page.hits
                if not page.cursor:
                    return
                body = {"cursor": page.cursor}

    async def add_objects(self, documents: Sequence[IndexDocument]) -> list[ObjectID]:
        requests = [BatchRequest(action="addObject", body=dict(doc)) for doc in documents]
        return await self._batch("addObject", requests)

    async def save_objects(self, documents: Sequence[IndexDocument]) -> list[ObjectID]:
        requests: list[BatchRequest] = []
        for document in documents:
            if OBJECT_ID_KEY not in document:
                raise ValueError(f"Cannot save a document without {OBJECT_ID_KEY}")
            requests.append(BatchRequest(action="updateObject", body=dict(document)))
        return await self._batch("updateObject", requests)

    async def delete_objects(self, object_ids: Sequence[ObjectID]) -> list[ObjectID]:
        requests = [
            BatchRequest(action="deleteObject", body={OBJECT_ID_KEY: object_id})
            for object_id in object_ids
        ]
        return await self._batch("deleteObject", requests)

    async def _batch(self, action: BatchAction, requests: list[BatchRequest]) -> list[ObjectID]:
        if not requests:
            return []
        size = max(1, self.config.batch_size)
        object_ids: list[ObjectID] = []
        async with self.client_factory(self.config.resilience_config()) as client:
            for start in range(0, len(requests), size):
                chunk = BatchPayload(requests=requests[start : start + size])
                payload = await self._perform_request(
                    client=client,
                    path=f"{self._path}/batch",
                    body=chunk.model_dump(mode="json"),
                )
                object_ids.extend(_validate(BatchResponse, payload).object_ids)
        log.debug("%s: %d objects on %s", action, len(object_ids), self.name)
        return object_ids

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        path: str,
        body: dict[str, Any],
    ) -> object:
        response = await client.post(path, json=body, headers=self._auth_headers())
        if response.is_error:
            _raise_api_error(response)
        return response.json()

    def _auth_headers(self) -> dict[str, str]:
        return {
            "X-Algolia-Application-Id": self.config.application_id,
            "X-Algolia-API-Key": self.config.api_key,
        }


def _validate[M: AlgoliaBaseModel](model: type[M], payload: object) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise AlgoliaAPIError(f"Unexpected Algolia payload for {model.__name__}") from exc


def _raise_api_error(response: httpx.Response) -> None:
    try:
        error = ErrorResponse.model_validate(response.json())
    except ValueError:
        response.raise_for_status()
        raise
    log.error("Algolia API error %s: %s", response.status_code, error.message)
    raise AlgoliaAPIError(error.message, status_code=response.status_code) from None


if TYPE_CHECKING:
    _index_check: SearchIndex = AlgoliaIndex("example")
