"""Fixtures for API tests: temp page templates and a mocked upstream."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from tests.conftest import json_transport
from tests.sample_data import PAGE_HTML, SDN1_RECORD

from school_branding.api.app import app
from school_branding.api.deps import (
    get_http_client,
    get_settings,
    get_storage_backend,
)
from school_branding.config import Settings
from school_branding.storage.scoped_store import InMemoryBackend

SETUP_HTML = "<html><head><title>Setup</title></head><body>setup</body></html>"


@pytest.fixture()
def pages_dir(tmp_path: Path) -> Path:
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "index.html").write_text(PAGE_HTML, encoding="utf-8")
    (pages / "guru.html").write_text(PAGE_HTML, encoding="utf-8")
    (pages / "setup.html").write_text(SETUP_HTML, encoding="utf-8")
    return pages


@pytest.fixture()
def api_settings(pages_dir: Path, tmp_path: Path) -> Settings:
    return Settings(pages_dir=pages_dir, config_dir=tmp_path, _env_file=None)


@pytest.fixture()
def upstream_routes() -> dict[str, Any]:
    return {
        "config/schools.json": {"sdn1": SDN1_RECORD},
        "data/guru.json": [{"nama": "Bu Ani"}],
    }


@pytest.fixture()
def upstream_calls() -> list[str]:
    return []


@pytest.fixture()
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture()
async def client(
    api_settings: Settings,
    upstream_routes: dict[str, Any],
    upstream_calls: list[str],
    backend: InMemoryBackend,
) -> AsyncGenerator[AsyncClient]:
    """AsyncClient against the app with upstream and storage stubbed.

    Requests default to the ``sdn1`` school host.
    """
    upstream = httpx.AsyncClient(
        transport=json_transport(upstream_routes, upstream_calls),
        base_url="http://upstream.test/",
    )
    app.dependency_overrides[get_http_client] = lambda: upstream
    app.dependency_overrides[get_storage_backend] = lambda: backend
    app.dependency_overrides[get_settings] = lambda: api_settings
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://sdn1.yourdomain.com",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
    await upstream.aclose()
