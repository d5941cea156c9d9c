"""Tenant-scoped key-value storage endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from school_branding.api.deps import get_tenant_store
from school_branding.api.schemas import (
    StorageItemResponse,
    StorageKeysResponse,
    StorageWriteRequest,
)
from school_branding.storage.scoped_store import TenantScopedStore

router = APIRouter(prefix="/storage", tags=["storage"])

StoreDep = Annotated[TenantScopedStore, Depends(get_tenant_store)]


@router.get("", response_model=StorageKeysResponse)
async def list_keys(store: StoreDep) -> StorageKeysResponse:
    """Logical keys stored by the requesting school."""
    return StorageKeysResponse(tenant_id=store.tenant_id, keys=store.keys())


@router.get("/{key}", response_model=StorageItemResponse)
async def get_item(key: str, store: StoreDep) -> StorageItemResponse:
    value = store.get(key)
    if value is None:
        raise HTTPException(status_code=404, detail="Key not found")
    return StorageItemResponse(key=key, value=value)


@router.put("/{key}", response_model=StorageItemResponse)
async def set_item(
    key: str,
    body: StorageWriteRequest,
    store: StoreDep,
) -> StorageItemResponse:
    store.set(key, body.value)
    return StorageItemResponse(key=key, value=body.value)


@router.delete("/{key}", status_code=204)
async def remove_item(key: str, store: StoreDep) -> None:
    """Remove ``key`` for the requesting school; other schools are untouched."""
    store.remove(key)
