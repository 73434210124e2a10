"""Pydantic schemas for the media API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class MediaResponse(BaseModel):
    id: int
    name: str | None
    description: str | None = None
    enabled: bool
    provider_name: str
    provider_status: int | None = None
    provider_reference: str | None = None
    context: str | None = None
    content_type: str | None = None
    size: int | None = None
    extension: str | None = None
    cdn_is_flushable: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    format: str
    public_url: str
    private_url: str | None = None
    helper: dict[str, Any] = Field(default_factory=dict)


class MediaListResponse(BaseModel):
    context: str
    items: list[MediaResponse]


class ContextResponse(BaseModel):
    name: str
    providers: list[str]
    formats: list[str]


class FormFieldPayload(BaseModel):
    name: str
    type: str | None = None
    required: bool = False


class ProviderFormResponse(BaseModel):
    provider: str
    mode: str
    fields: list[FormFieldPayload]
