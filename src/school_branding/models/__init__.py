"""School configuration and resolver state models."""

from school_branding.models.school import (
    DEFAULT_CONFIG,
    DEMO_TENANT,
    ColorScheme,
    ContactInfo,
    ResolverState,
    SetupRedirect,
    TenantConfig,
    TenantInfo,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DEMO_TENANT",
    "ColorScheme",
    "ContactInfo",
    "ResolverState",
    "SetupRedirect",
    "TenantConfig",
    "TenantInfo",
]
