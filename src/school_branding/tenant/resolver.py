"""Page-load orchestration: detect school, load config, brand the page."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import urlencode

import structlog
from bs4 import BeautifulSoup

from school_branding.branding.document import apply_branding
from school_branding.branding.notification import render_notification
from school_branding.config import LabelPolicy, Settings
from school_branding.errors import ConfigNotFoundError, SetupRequiredError
from school_branding.models.school import (
    DEFAULT_CONFIG,
    DEMO_TENANT,
    ResolverState,
    SetupRedirect,
    TenantConfig,
    TenantInfo,
)
from school_branding.tenant.detection import (
    DEFAULT_RESERVED_FRAGMENTS,
    DEFAULT_RESERVED_HOSTS,
    resolve_tenant,
)
from school_branding.tenant.loader import TenantConfigLoader

logger = structlog.get_logger()


class TenantBrandingResolver:
    """Runs the branding initialization for one page load.

    ``UNINITIALIZED -> RESOLVING_TENANT -> LOADING_CONFIG`` and then one of
    ``BRANDED``, ``FALLBACK_DEFAULT`` (demo school without config) or
    ``REDIRECTING_TO_SETUP`` (any other school without config). Declining
    the setup moves ``REDIRECTING_TO_SETUP`` to ``FALLBACK_DEFAULT``. There
    are no retries; create a new resolver for the next page load.

    Usage::

        resolver = TenantBrandingResolver.from_settings(loader, settings)
        try:
            await resolver.initialize(request.headers["host"])
        except SetupRequiredError as exc:
            ...  # send the user to exc.redirect.url, or on refusal:
            resolver.decline_setup()
        resolver.brand(document)
    """

    def __init__(
        self,
        loader: TenantConfigLoader,
        *,
        reserved_hosts: Iterable[str] = DEFAULT_RESERVED_HOSTS,
        reserved_fragments: Iterable[str] = DEFAULT_RESERVED_FRAGMENTS,
        label_policy: LabelPolicy = LabelPolicy.STRICT,
        product_name: str = "Brangkas Data Guru",
        product_tagline: str = "Brangkas Data Guru Digital",
        setup_page: str = "setup.html",
        setup_prompt: str = (
            'Sekolah "{tenant_id}" belum dikonfigurasi. Lanjut ke halaman setup?'
        ),
        confirm_before_redirect: bool = True,
        show_welcome_notification: bool = True,
        welcome_message: str = "Selamat datang di {name}",
    ) -> None:
        self._loader = loader
        self._reserved_hosts = frozenset(reserved_hosts)
        self._reserved_fragments = tuple(reserved_fragments)
        self._label_policy = label_policy
        self._product_name = product_name
        self._product_tagline = product_tagline
        self._setup_page = setup_page
        self._setup_prompt = setup_prompt
        self._confirm_before_redirect = confirm_before_redirect
        self._show_welcome_notification = show_welcome_notification
        self._welcome_message = welcome_message

        self.state = ResolverState.UNINITIALIZED
        self.tenant_id: str | None = None
        self.config: TenantConfig | None = None
        self.redirect: SetupRedirect | None = None

    @classmethod
    def from_settings(
        cls, loader: TenantConfigLoader, settings: Settings
    ) -> TenantBrandingResolver:
        return cls(
            loader,
            reserved_hosts=settings.reserved_hosts,
            reserved_fragments=settings.reserved_host_fragments,
            label_policy=settings.label_policy,
            product_name=settings.product_name,
            product_tagline=settings.product_tagline,
            setup_page=settings.setup_page,
            setup_prompt=settings.setup_prompt,
            confirm_before_redirect=settings.confirm_before_redirect,
            show_welcome_notification=settings.show_welcome_notification,
            welcome_message=settings.welcome_message,
        )

    def detect(self, host: str) -> str:
        """Resolve and remember the school for ``host``."""
        self.state = ResolverState.RESOLVING_TENANT
        self.tenant_id = resolve_tenant(
            host,
            reserved_hosts=self._reserved_hosts,
            reserved_fragments=self._reserved_fragments,
            label_policy=self._label_policy,
        )
        logger.info("tenant_detected", tenant_id=self.tenant_id, host=host)
        return self.tenant_id

    async def initialize(self, host: str) -> TenantConfig:
        """Detect the school and settle on the configuration to brand with.

        Returns:
            The school's config, or the built-in default for the demo school.

        Raises:
            SetupRequiredError: a non-demo school has no usable config.
        """
        tenant_id = self.detect(host)
        self.state = ResolverState.LOADING_CONFIG

        try:
            self.config = await self.load_config()
        except ConfigNotFoundError as exc:
            if self.redirect is not None:
                self.state = ResolverState.REDIRECTING_TO_SETUP
                raise SetupRequiredError(self.redirect) from exc
            logger.warning(
                "config_not_found_using_default",
                tenant_id=tenant_id,
                reason=exc.reason,
            )
            self.config = DEFAULT_CONFIG
            self.state = ResolverState.FALLBACK_DEFAULT
            return self.config

        self.state = ResolverState.BRANDED
        logger.info(
            "school_config_loaded", tenant_id=tenant_id, school=self.config.name
        )
        return self.config

    async def load_config(self) -> TenantConfig:
        """Fetch the detected school's config.

        A non-demo school without config triggers :meth:`redirect_to_setup`
        before the error propagates.
        """
        if self.tenant_id is None:
            msg = "School not detected. Call detect() or initialize() first"
            raise RuntimeError(msg)

        try:
            return await self._loader.load(self.tenant_id)
        except ConfigNotFoundError:
            if self.tenant_id != DEMO_TENANT:
                self.redirect_to_setup()
            raise

    def redirect_to_setup(self) -> SetupRedirect:
        """Record the navigation to the setup page for the current school."""
        tenant_id = self.tenant_id or DEMO_TENANT
        url = f"{self._setup_page}?{urlencode({'school': tenant_id})}"
        self.redirect = SetupRedirect(
            tenant_id=tenant_id,
            url=url,
            message=self._setup_prompt.format(tenant_id=tenant_id),
            confirm=self._confirm_before_redirect,
        )
        logger.info("redirecting_to_setup", tenant_id=tenant_id, url=url)
        return self.redirect

    def decline_setup(self) -> TenantConfig:
        """Continue without setup: brand with the default config instead."""
        logger.info(
            "setup_declined_using_default",
            tenant_id=self.tenant_id or DEMO_TENANT,
        )
        self.redirect = None
        self.config = DEFAULT_CONFIG
        self.state = ResolverState.FALLBACK_DEFAULT
        return self.config

    def brand(self, document: BeautifulSoup) -> None:
        """Apply the active config to ``document``; no-op before initialize()."""
        if self.config is None:
            return

        apply_branding(
            document,
            self.config,
            product_name=self._product_name,
            product_tagline=self._product_tagline,
        )

        if (
            self._show_welcome_notification
            and self.state == ResolverState.BRANDED
            and self.tenant_id != DEMO_TENANT
        ):
            render_notification(
                document,
                self._welcome_message.format(name=self.config.name),
                "success",
            )

    def current_tenant(self) -> TenantInfo:
        """Detected school and its active config."""
        return TenantInfo(
            id=self.tenant_id or DEMO_TENANT,
            config=self.config,
            state=self.state,
        )
