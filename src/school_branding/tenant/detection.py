"""Detect the school from the host a page is served on.

``sdn1.yourdomain.com`` belongs to school ``sdn1``; local and shared
hosting addresses belong to nobody and get the demo school.
"""

from __future__ import annotations

from collections.abc import Iterable

from school_branding.config import LabelPolicy
from school_branding.models.school import DEMO_TENANT

DEFAULT_RESERVED_HOSTS: frozenset[str] = frozenset(
    {"localhost", "127.0.0.1", "yourdomain.com", "www.yourdomain.com"}
)
DEFAULT_RESERVED_FRAGMENTS: tuple[str, ...] = ("github.io",)

MIN_SUBDOMAIN_LABELS = 3


def normalize_host(host: str) -> str:
    """Reduce a ``Host`` header value to a bare lowercase hostname.

    Drops the port (``sdn1.example.com:8000``) and the brackets around
    IPv6 literals (``[::1]:8000``).
    """
    host = host.strip().lower()
    if host.startswith("["):
        end = host.find("]")
        return host[1:end] if end != -1 else host[1:]
    if host.count(":") == 1:
        host = host.split(":", 1)[0]
    return host


def resolve_tenant(
    host: str,
    *,
    reserved_hosts: Iterable[str] = DEFAULT_RESERVED_HOSTS,
    reserved_fragments: Iterable[str] = DEFAULT_RESERVED_FRAGMENTS,
    label_policy: LabelPolicy = LabelPolicy.STRICT,
) -> str:
    """Return the school identifier for ``host``.

    Args:
        host: Host address as seen by the page (port allowed).
        reserved_hosts: Exact hostnames that always map to the demo school.
        reserved_fragments: Substrings (e.g. a static hosting domain) that
            map any matching host to the demo school.
        label_policy: Handling of hosts with fewer than three labels.

    Returns:
        The leading host label, or ``"demo"``. The label is not validated.
    """
    hostname = normalize_host(host)
    if not hostname:
        return DEMO_TENANT

    if hostname in set(reserved_hosts) or any(
        fragment in hostname for fragment in reserved_fragments
    ):
        return DEMO_TENANT

    parts = hostname.split(".")
    if len(parts) >= MIN_SUBDOMAIN_LABELS:
        return parts[0]

    if label_policy == LabelPolicy.FIRST_LABEL:
        return parts[0]
    return DEMO_TENANT
