"""Pydantic models describing Algolia REST payloads."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

BatchAction = Literal["addObject", "updateObject", "deleteObject"]


class AlgoliaBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BrowsePage(AlgoliaBaseModel):
    hits: list[dict[str, Any]] = Field(default_factory=list)
    cursor: str | None = None
    nb_hits: int | None = Field(default=None, alias="nbHits")


class BatchRequest(AlgoliaBaseModel):
    action: BatchAction
    body: dict[str, Any]


class BatchPayload(AlgoliaBaseModel):
    requests: list[BatchRequest]


class BatchResponse(AlgoliaBaseModel):
    task_id: int | None = Field(default=None, alias="taskID")
    object_ids: list[str] = Field(default_factory=list, alias="objectIDs")


class ErrorResponse(AlgoliaBaseModel):
    message: str
    status: int | None = None
