"""School detection, config loading and page-load orchestration.

Quick start::

    from school_branding.config import get_settings
    from school_branding.tenant import TenantBrandingResolver, TenantConfigLoader

    settings = get_settings()
    loader = TenantConfigLoader(http_client, source=settings.config_source)
    resolver = TenantBrandingResolver.from_settings(loader, settings)
    config = await resolver.initialize("sdn1.yourdomain.com")
"""

from school_branding.tenant.detection import normalize_host, resolve_tenant
from school_branding.tenant.loader import TenantConfigLoader
from school_branding.tenant.resolver import TenantBrandingResolver

__all__ = [
    "TenantBrandingResolver",
    "TenantConfigLoader",
    "normalize_host",
    "resolve_tenant",
]
