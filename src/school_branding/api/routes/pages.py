"""Branded HTML pages.

Templates are static files in ``Settings.pages_dir``; each request re-runs
the school detection and brands a fresh parse of the template.
"""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Annotated
from urllib.parse import urlencode

import anyio
from bs4 import BeautifulSoup
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from school_branding.api.deps import get_request_host, get_resolver, get_settings
from school_branding.config import Settings
from school_branding.errors import SetupRequiredError
from school_branding.models.school import SetupRedirect
from school_branding.tenant.resolver import TenantBrandingResolver

router = APIRouter(tags=["pages"])

INDEX_PAGE = "index.html"
SKIP_SETUP_PARAM = "setup"
SKIP_SETUP_VALUE = "skip"

SettingsDep = Annotated[Settings, Depends(get_settings)]
ResolverDep = Annotated[TenantBrandingResolver, Depends(get_resolver)]
HostDep = Annotated[str, Depends(get_request_host)]


def setup_confirmation_page(redirect: SetupRedirect, page_name: str) -> str:
    """Page asking the user before leaving for the setup flow.

    Cancel reloads ``page_name`` with ``?setup=skip``, which brands it with
    the default config.
    """
    message = escape(redirect.message)
    url = escape(f"/{redirect.url}", quote=True)
    query = urlencode({SKIP_SETUP_PARAM: SKIP_SETUP_VALUE})
    cancel_url = escape(f"/{page_name}?{query}", quote=True)
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Setup</title></head>
<body>
<p class="setup-prompt">{message}</p>
<p>
<a class="setup-link" href="{url}">OK</a>
<a class="setup-cancel" href="{cancel_url}">Cancel</a>
</p>
</body>
</html>
"""


async def _read_template(pages_dir: Path, page_name: str) -> str:
    if not page_name.endswith(".html") or "/" in page_name or "\\" in page_name:
        raise HTTPException(status_code=404, detail="Page not found")

    path = anyio.Path(pages_dir) / page_name
    if not await path.is_file():
        raise HTTPException(status_code=404, detail="Page not found")
    return await path.read_text(encoding="utf-8")


async def _render(
    page_name: str,
    host: str,
    resolver: TenantBrandingResolver,
    settings: Settings,
    *,
    skip_setup: bool = False,
) -> Response:
    html = await _read_template(settings.pages_dir, page_name)
    if page_name == settings.setup_page:
        return HTMLResponse(html)

    try:
        await resolver.initialize(host)
    except SetupRequiredError as exc:
        if skip_setup:
            resolver.decline_setup()
        elif exc.redirect.confirm:
            return HTMLResponse(setup_confirmation_page(exc.redirect, page_name))
        else:
            return RedirectResponse(url=f"/{exc.redirect.url}", status_code=307)

    document = BeautifulSoup(html, "html.parser")
    resolver.brand(document)
    return HTMLResponse(str(document))


@router.get("/", response_class=HTMLResponse)
async def index(
    host: HostDep,
    resolver: ResolverDep,
    settings: SettingsDep,
    setup: str | None = None,
) -> Response:
    return await _render(
        INDEX_PAGE, host, resolver, settings, skip_setup=setup == SKIP_SETUP_VALUE
    )


@router.get("/{page_name}", response_class=HTMLResponse)
async def page(
    page_name: str,
    host: HostDep,
    resolver: ResolverDep,
    settings: SettingsDep,
    setup: str | None = None,
) -> Response:
    """Serve ``page_name`` branded for the school on the request host.

    ``?setup=skip`` brands an unconfigured school with the default config
    instead of asking for setup again.
    """
    return await _render(
        page_name, host, resolver, settings, skip_setup=setup == SKIP_SETUP_VALUE
    )
