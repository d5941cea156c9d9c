"""Fetch school configuration from the static ``config/`` resource."""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from school_branding.config import ConfigSource
from school_branding.errors import ConfigNotFoundError, NetworkFailureError
from school_branding.models.school import TenantConfig

logger = structlog.get_logger()

COMBINED_CONFIG_PATH = "config/schools.json"
PER_TENANT_CONFIG_PATH = "config/schools/{tenant_id}.json"


class TenantConfigLoader:
    """Load one school's :class:`TenantConfig` with a single GET.

    The HTTP client is injected so the app can share one connection pool
    and tests can swap in ``httpx.MockTransport``. Relative paths are
    resolved against the client's ``base_url``.

    Usage::

        async with httpx.AsyncClient(base_url="https://sdn1.example.com/") as http:
            loader = TenantConfigLoader(http, source=ConfigSource.COMBINED)
            config = await loader.load("sdn1")
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        source: ConfigSource = ConfigSource.COMBINED,
    ) -> None:
        self._http = http_client
        self._source = source

    def config_path(self, tenant_id: str) -> str:
        """Relative path of the JSON document holding ``tenant_id``."""
        if self._source == ConfigSource.PER_TENANT:
            return PER_TENANT_CONFIG_PATH.format(tenant_id=tenant_id)
        return COMBINED_CONFIG_PATH

    async def load(self, tenant_id: str) -> TenantConfig:
        """Fetch and parse the configuration for ``tenant_id``.

        Raises:
            NetworkFailureError: transport error or timeout.
            ConfigNotFoundError: non-2xx status, body that is not JSON,
                missing key in the combined mapping, or a record with
                the wrong shape.
        """
        path = self.config_path(tenant_id)
        try:
            response = await self._http.get(path)
        except httpx.TransportError as exc:
            raise NetworkFailureError(
                tenant_id, f"{type(exc).__name__}: {exc}"
            ) from exc

        if not response.is_success:
            raise ConfigNotFoundError(
                tenant_id, f"HTTP {response.status_code} for {path}"
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise ConfigNotFoundError(tenant_id, f"invalid JSON in {path}") from exc

        record = self._select_record(tenant_id, payload)
        try:
            config = TenantConfig.model_validate(record)
        except ValidationError as exc:
            raise ConfigNotFoundError(
                tenant_id, f"malformed record ({exc.error_count()} errors)"
            ) from exc

        logger.debug("school_config_fetched", tenant_id=tenant_id, path=path)
        return config

    def _select_record(self, tenant_id: str, payload: Any) -> Any:
        if self._source == ConfigSource.PER_TENANT:
            return payload
        if not isinstance(payload, dict) or tenant_id not in payload:
            raise ConfigNotFoundError(
                tenant_id, f"no entry in {COMBINED_CONFIG_PATH}"
            )
        return payload[tenant_id]
