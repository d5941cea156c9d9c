"""Per-school key namespacing over a shared key-value backend.

Several schools can share one backend (one browser profile, one Redis
database, one process). Every key is stored as ``<tenant_id>_<key>``, so
two schools using the same logical key never see each other's values.
"""

from __future__ import annotations

from threading import Lock
from typing import Protocol


class KeyValueBackend(Protocol):
    """Raw synchronous string store, e.g. a browser ``localStorage``."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...


class InMemoryBackend:
    """Process-local :class:`KeyValueBackend`.

    Used as the app's shared backend and in tests. Values live as long
    as the process does.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = Lock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)


class TenantScopedStore:
    """View of a :class:`KeyValueBackend` limited to one school.

    Handed to callers explicitly (FastAPI dependency) instead of patching
    the backend, so unscoped access stays possible where it is wanted.
    """

    def __init__(self, tenant_id: str, backend: KeyValueBackend) -> None:
        self._tenant_id = tenant_id
        self._backend = backend
        self._prefix = f"{tenant_id}_"

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    def scoped_key(self, key: str) -> str:
        """Backend key under which ``key`` is stored for this school."""
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        return self._backend.get_item(self.scoped_key(key))

    def set(self, key: str, value: str) -> None:
        self._backend.set_item(self.scoped_key(key), value)

    def remove(self, key: str) -> None:
        self._backend.remove_item(self.scoped_key(key))

    def keys(self) -> list[str]:
        """Logical keys this school has stored, without the prefix.

        Matching is by prefix only and school ids are not validated, so ids
        that contain ``_`` overlap: ``foo`` stored by school ``sdn1_x``
        is listed by ``sdn1`` as ``x_foo``. get/set/remove are exact and
        unaffected.
        """
        return sorted(
            k[len(self._prefix) :]
            for k in self._backend.keys()
            if k.startswith(self._prefix)
        )
