"""FastAPI dependency injection."""

from __future__ import annotations

from typing import cast

import httpx
from fastapi import Depends, Request

from school_branding.config import Settings, get_settings
from school_branding.http_client import TenantHttpClient
from school_branding.storage.scoped_store import KeyValueBackend, TenantScopedStore
from school_branding.tenant.detection import resolve_tenant
from school_branding.tenant.loader import TenantConfigLoader
from school_branding.tenant.resolver import TenantBrandingResolver

__all__ = [
    "get_config_loader",
    "get_http_client",
    "get_request_host",
    "get_resolver",
    "get_settings",
    "get_storage_backend",
    "get_tenant_http_client",
    "get_tenant_id",
    "get_tenant_store",
]

_get_settings = Depends(get_settings)


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """Retrieve the shared httpx client from app state.

    Initialized during lifespan startup.
    """
    return cast(httpx.AsyncClient, request.app.state.http_client)


async def get_storage_backend(request: Request) -> KeyValueBackend:
    """Retrieve the shared key-value backend from app state.

    Initialized during lifespan startup.
    """
    return cast(KeyValueBackend, request.app.state.storage_backend)


_get_http_client = Depends(get_http_client)
_get_storage_backend = Depends(get_storage_backend)


async def get_request_host(request: Request) -> str:
    """Raw ``Host`` header, the server-side view of the page's hostname."""
    return request.headers.get("host", "")


_get_request_host = Depends(get_request_host)


async def get_tenant_id(
    host: str = _get_request_host,
    settings: Settings = _get_settings,
) -> str:
    """School identifier for the request's ``Host`` header."""
    return resolve_tenant(
        host,
        reserved_hosts=settings.reserved_hosts,
        reserved_fragments=settings.reserved_host_fragments,
        label_policy=settings.label_policy,
    )


_get_tenant_id = Depends(get_tenant_id)


async def get_config_loader(
    http_client: httpx.AsyncClient = _get_http_client,
    settings: Settings = _get_settings,
) -> TenantConfigLoader:
    return TenantConfigLoader(http_client, source=settings.config_source)


async def get_resolver(
    loader: TenantConfigLoader = Depends(get_config_loader),
    settings: Settings = _get_settings,
) -> TenantBrandingResolver:
    """Fresh resolver per request; one request is one page load."""
    return TenantBrandingResolver.from_settings(loader, settings)


async def get_tenant_store(
    tenant_id: str = _get_tenant_id,
    backend: KeyValueBackend = _get_storage_backend,
) -> TenantScopedStore:
    return TenantScopedStore(tenant_id, backend)


async def get_tenant_http_client(
    http_client: httpx.AsyncClient = _get_http_client,
) -> TenantHttpClient:
    return TenantHttpClient(http_client)
