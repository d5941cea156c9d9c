"""Request/response schemas for the API layer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StorageWriteRequest(BaseModel):
    """Request body for ``PUT /storage/{key}``."""

    value: str


class StorageItemResponse(BaseModel):
    """One stored value, addressed by its logical (unprefixed) key."""

    key: str
    value: str


class StorageKeysResponse(BaseModel):
    """Logical keys stored for the requesting school."""

    tenant_id: str
    keys: list[str] = Field(default_factory=list)


class SetupRequiredResponse(BaseModel):
    """Body of a ``409`` for a school that still needs setup."""

    detail: str
    tenant_id: str
    setup_url: str
