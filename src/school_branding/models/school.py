"""School configuration schemas.

Only the record shape is enforced here: required keys must be present and
hold strings. Color values are taken as-is (no hex format check) and
unknown keys are ignored, so config files written for newer versions of
the pages keep loading.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

DEMO_TENANT = "demo"


class ColorScheme(BaseModel):
    """Primary/secondary hex colors of a school."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    primary: str
    secondary: str


class ContactInfo(BaseModel):
    """Optional contact details shown on the pages."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    phone: str | None = None
    email: str | None = None


class TenantConfig(BaseModel):
    """Branding record for one school, as stored in the config JSON.

    Example::

        {
            "name": "SD Negeri 1",
            "logo": "assets/images/sdn1.png",
            "colors": {"primary": "#1d4ed8", "secondary": "#f59e0b"},
            "contact": {"phone": "021-555-0101", "email": "tu@sdn1.sch.id"}
        }
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    logo: str
    colors: ColorScheme
    contact: ContactInfo | None = None


DEFAULT_CONFIG = TenantConfig(
    name="Demo School",
    logo="assets/images/logo.png",
    colors=ColorScheme(primary="#3b82f6", secondary="#10b981"),
)


class ResolverState(StrEnum):
    """Lifecycle of one page-load initialization."""

    UNINITIALIZED = "uninitialized"
    RESOLVING_TENANT = "resolving_tenant"
    LOADING_CONFIG = "loading_config"
    BRANDED = "branded"
    FALLBACK_DEFAULT = "fallback_default"
    REDIRECTING_TO_SETUP = "redirecting_to_setup"


@dataclass(frozen=True)
class SetupRedirect:
    """Navigation to the setup flow for an unconfigured school.

    ``confirm`` tells the presentation layer to ask the user first
    instead of navigating straight away.
    """

    tenant_id: str
    url: str
    message: str
    confirm: bool = True


class TenantInfo(BaseModel):
    """Snapshot of the detected school and its active configuration."""

    id: str
    config: TenantConfig | None
    state: ResolverState
