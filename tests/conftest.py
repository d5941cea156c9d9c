"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from tests.sample_data import SDN1_RECORD, SMP2_RECORD

from school_branding.config import ConfigSource
from school_branding.tenant.loader import TenantConfigLoader


def json_transport(
    routes: dict[str, Any],
    calls: list[str] | None = None,
) -> httpx.MockTransport:
    """MockTransport answering ``routes[path]`` as JSON, 404 otherwise.

    A value that is an Exception instance is raised instead.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.lstrip("/")
        if calls is not None:
            calls.append(str(request.url))
        if path not in routes:
            return httpx.Response(404, text="Not Found")
        value = routes[path]
        if isinstance(value, Exception):
            raise value
        if isinstance(value, str):
            return httpx.Response(200, text=value)
        return httpx.Response(200, content=json.dumps(value).encode())

    return httpx.MockTransport(handler)


@pytest.fixture()
def combined_routes() -> dict[str, Any]:
    return {"config/schools.json": {"sdn1": SDN1_RECORD, "smp2": SMP2_RECORD}}


@pytest.fixture()
def make_loader() -> Callable[..., TenantConfigLoader]:
    """Factory building a loader over a MockTransport."""

    def _make(
        routes: dict[str, Any],
        *,
        source: ConfigSource = ConfigSource.COMBINED,
        calls: list[str] | None = None,
    ) -> TenantConfigLoader:
        client = httpx.AsyncClient(
            transport=json_transport(routes, calls),
            base_url="http://school.test/",
        )
        return TenantConfigLoader(client, source=source)

    return _make
