"""HTTP client that tags data/API calls with the requesting school."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

logger = structlog.get_logger()

TAGGED_PATH_MARKERS: tuple[str, ...] = ("data/", "api/")
TENANT_QUERY_PARAM = "school_id"


def tag_url(url: str, tenant_id: str) -> str:
    """Append ``school_id=<tenant_id>`` to data and API URLs.

    Only URLs containing ``data/`` or ``api/`` are tagged; ``&`` is used
    when the URL already carries a query string, ``?`` otherwise. A
    ``#fragment`` stays at the end, after the tag.

    >>> tag_url("api/students", "sdn1")
    'api/students?school_id=sdn1'
    >>> tag_url("data/grades.json?term=2", "sdn1")
    'data/grades.json?term=2&school_id=sdn1'
    """
    base, hash_mark, fragment = url.partition("#")
    if not any(marker in base for marker in TAGGED_PATH_MARKERS):
        return url
    separator = "&" if "?" in base else "?"
    tagged = f"{base}{separator}{TENANT_QUERY_PARAM}={tenant_id}"
    return f"{tagged}{hash_mark}{fragment}"


class TenantHttpClient:
    """Thin wrapper over ``httpx.AsyncClient`` that tags outgoing URLs.

    The school is passed on every call, so one client can serve requests
    for different schools.

    Usage::

        async with httpx.AsyncClient(base_url="https://backend/") as http:
            client = TenantHttpClient(http)
            response = await client.get("api/teachers", tenant_id="sdn1")
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def request(
        self,
        method: str,
        url: str,
        *,
        tenant_id: str,
        **kwargs: Any,
    ) -> httpx.Response:
        tagged = tag_url(url, tenant_id)
        if tagged != url:
            logger.debug("request_tagged", url=tagged, tenant_id=tenant_id)
        return await self._http.request(method, tagged, **kwargs)

    async def get(self, url: str, *, tenant_id: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, tenant_id=tenant_id, **kwargs)

    async def post(
        self, url: str, *, tenant_id: str, **kwargs: Any
    ) -> httpx.Response:
        return await self.request("POST", url, tenant_id=tenant_id, **kwargs)
