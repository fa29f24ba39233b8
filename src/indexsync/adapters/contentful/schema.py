"""Pydantic models describing Contentful Sync API payloads."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ContentfulBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LinkSys(ContentfulBaseModel):
    type: Literal["Link"]
    link_type: str = Field(alias="linkType")
    id: str


class LinkPayload(ContentfulBaseModel):
    sys: LinkSys


class SysPayload(ContentfulBaseModel):
    """Entry ``sys`` block; unknown keys are kept as envelope metadata."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    type: str
    content_type: LinkPayload | None = Field(default=None, alias="contentType")


class EntryPayload(ContentfulBaseModel):
    sys: SysPayload
    fields: dict[str, dict[str, Any]] = Field(default_factory=dict)


class SyncPage(ContentfulBaseModel):
    items: list[dict[str, Any]] = Field(default_factory=list)
    next_page_url: str | None = Field(default=None, alias="nextPageUrl")
    next_sync_url: str | None = Field(default=None, alias="nextSyncUrl")


class ErrorSys(ContentfulBaseModel):
    type: Literal["Error"]
    id: str


class ErrorResponse(ContentfulBaseModel):
    sys: ErrorSys
    message: str = ""
    request_id: str | None = Field(default=None, alias="requestId")
