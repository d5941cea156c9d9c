"""Pass-through for the pages' data fetches, tagged with the school."""

from typing import Annotated

import httpx
import structlog
from fastapi import APIRouter, Depends, Request, Response

from school_branding.api.deps import get_tenant_http_client, get_tenant_id
from school_branding.http_client import TenantHttpClient

logger = structlog.get_logger()

router = APIRouter(tags=["data"])

ClientDep = Annotated[TenantHttpClient, Depends(get_tenant_http_client)]
TenantIdDep = Annotated[str, Depends(get_tenant_id)]


@router.get("/data/{path:path}")
async def fetch_data(
    path: str,
    request: Request,
    client: ClientDep,
    tenant_id: TenantIdDep,
) -> Response:
    """Fetch ``data/<path>`` upstream with ``school_id`` appended.

    The incoming query string is forwarded unchanged ahead of the tag.
    """
    url = f"data/{path}"
    if request.url.query:
        url = f"{url}?{request.url.query}"

    try:
        upstream = await client.get(url, tenant_id=tenant_id)
    except httpx.TransportError as exc:
        logger.error("data_fetch_failed", url=url, error=type(exc).__name__)
        return Response(status_code=502, content="Upstream data fetch failed")

    return Response(
        status_code=upstream.status_code,
        content=upstream.content,
        media_type=upstream.headers.get("content-type"),
    )
