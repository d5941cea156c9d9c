"""Settings for the branding service, read from the environment and ``.env``."""

from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class ConfigSource(StrEnum):
    """Layout of the static school configuration resource."""

    COMBINED = "combined"  # config/schools.json, identifier -> record
    PER_TENANT = "per_tenant"  # config/schools/<identifier>.json


class LabelPolicy(StrEnum):
    """What to do with a host that has fewer than three labels."""

    STRICT = "strict"  # fall back to the demo school
    FIRST_LABEL = "first_label"  # use the leading label anyway


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The reserved host lists decide which hosts never map to a school.
    ``config_base_url`` points at wherever the ``config/`` tree is served;
    by default that is this application itself.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- App ---
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "DEBUG"

    # --- School config resource ---
    config_base_url: str = "http://localhost:8000/"
    config_source: ConfigSource = ConfigSource.COMBINED
    config_fetch_timeout: float = 10.0
    config_dir: Path = Path("config")
    pages_dir: Path = Path("pages")

    # --- Tenant detection ---
    reserved_hosts: list[str] = [
        "localhost",
        "127.0.0.1",
        "yourdomain.com",
        "www.yourdomain.com",
    ]
    reserved_host_fragments: list[str] = ["github.io"]
    label_policy: LabelPolicy = LabelPolicy.STRICT

    # --- Branding ---
    product_name: str = "Brangkas Data Guru"
    product_tagline: str = "Brangkas Data Guru Digital"
    show_welcome_notification: bool = True
    welcome_message: str = "Selamat datang di {name}"

    # --- Setup flow ---
    setup_page: str = "setup.html"
    confirm_before_redirect: bool = True
    setup_prompt: str = (
        'Sekolah "{tenant_id}" belum dikonfigurasi. Lanjut ke halaman setup?'
    )

    # --- Convenience properties ---
    @property
    def is_dev(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_prod(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, built once.

    Route handlers take it through ``api.deps.get_settings`` so tests can
    swap it with ``app.dependency_overrides``::

        SettingsDep = Annotated[Settings, Depends(get_settings)]
    """
    return Settings()


settings = get_settings()
