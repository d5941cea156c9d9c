"""Domain-specific exceptions for school-branding."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from school_branding.models.school import SetupRedirect


class BrandingError(Exception):
    """Base class for school branding failures."""


class ConfigNotFoundError(BrandingError):
    """School configuration could not be fetched, parsed, or located."""

    def __init__(self, tenant_id: str, reason: str) -> None:
        self.tenant_id = tenant_id
        self.reason = reason
        super().__init__(f"Config for school '{tenant_id}' not found: {reason}")


class NetworkFailureError(ConfigNotFoundError):
    """Transport-level failure while fetching a school configuration."""


class SetupRequiredError(BrandingError):
    """A non-demo school has no configuration and must go through setup."""

    def __init__(self, redirect: SetupRedirect) -> None:
        self.redirect = redirect
        self.tenant_id = redirect.tenant_id
        super().__init__(f"School '{redirect.tenant_id}' is not configured")
