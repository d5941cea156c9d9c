"""Current-school endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from school_branding.api.deps import get_request_host, get_resolver
from school_branding.api.schemas import SetupRequiredResponse
from school_branding.errors import SetupRequiredError
from school_branding.models.school import TenantInfo
from school_branding.tenant.resolver import TenantBrandingResolver

router = APIRouter(tags=["tenant"])

HostDep = Annotated[str, Depends(get_request_host)]
ResolverDep = Annotated[TenantBrandingResolver, Depends(get_resolver)]


@router.get(
    "/tenant",
    response_model=TenantInfo,
    responses={409: {"model": SetupRequiredResponse}},
)
async def get_current_tenant(
    host: HostDep,
    resolver: ResolverDep,
) -> TenantInfo | JSONResponse:
    """Detected school and active branding config for the request host."""
    try:
        await resolver.initialize(host)
    except SetupRequiredError as exc:
        body = SetupRequiredResponse(
            detail=str(exc),
            tenant_id=exc.tenant_id,
            setup_url=exc.redirect.url,
        )
        return JSONResponse(status_code=409, content=body.model_dump())
    return resolver.current_tenant()
