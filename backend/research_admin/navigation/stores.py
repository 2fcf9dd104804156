"""
Permission stores — durable homes for the navigation permission table.

Every backend implements the same two operations:

    load()              → the full collection (possibly empty)
    bulk_save(perms)    → replace the full collection in one call

Backends:
    RemotePermissionStore   — the role-permissions REST API over httpx
    FilePermissionStore     — a local JSON file
    InMemoryPermissionStore — process memory only (tests, demos)

Transport and I/O failures surface as StoreUnreachable; payloads of the
wrong shape surface as MalformedStoreResponse. Recovery is the session's
job, not the store's.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

from research_admin.navigation.errors import MalformedStoreResponse, StoreUnreachable
from research_admin.navigation.models import NavigationPermission, parse_permissions

if TYPE_CHECKING:
    from research_admin.config import Settings

COLLECTION_PATH = "/api/role-permissions"
BULK_PATH = "/api/role-permissions/bulk"


def _to_wire(permissions: Iterable[NavigationPermission]) -> list[dict[str, str]]:
    return [p.to_wire() for p in permissions]


class PermissionStore(ABC):
    @abstractmethod
    async def load(self) -> list[NavigationPermission]:
        ...

    @abstractmethod
    async def bulk_save(self, permissions: list[NavigationPermission]) -> None:
        ...

    async def aclose(self) -> None:
        """Release any held resources. Default: nothing to release."""


class RemotePermissionStore(PermissionStore):
    """
    Client for the role-permissions API.

    GET  {base_url}/api/role-permissions       → list of records
    POST {base_url}/api/role-permissions/bulk  → {"permissions": [...]}

    An injected client is borrowed and left open on aclose(); a client the
    store creates itself is closed with it.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = 10.0,
        headers: dict[str, str] | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = headers or {}

    async def load(self) -> list[NavigationPermission]:
        try:
            resp = await self._client.get(f"{self.base_url}{COLLECTION_PATH}", headers=self._headers)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise StoreUnreachable(f"Loading permissions failed: {exc}") from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            raise MalformedStoreResponse("Permission store returned invalid JSON") from exc
        return parse_permissions(payload)

    async def bulk_save(self, permissions: list[NavigationPermission]) -> None:
        try:
            resp = await self._client.post(
                f"{self.base_url}{BULK_PATH}",
                json={"permissions": _to_wire(permissions)},
                headers=self._headers,
            )
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise StoreUnreachable(f"Saving permissions failed: {exc}") from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class FilePermissionStore(PermissionStore):
    """
    JSON file store. A missing file is an empty store, not an error.

    Each write goes to its own sibling temp file and is moved into place, so
    a crash mid-write leaves the previous table intact. Writes through one
    store instance are applied one at a time, in call order.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    async def load(self) -> list[NavigationPermission]:
        return await asyncio.to_thread(self._read)

    async def bulk_save(self, permissions: list[NavigationPermission]) -> None:
        records = _to_wire(permissions)
        async with self._write_lock:
            await asyncio.to_thread(self._write, records)

    def _read(self) -> list[NavigationPermission]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StoreUnreachable(f"Cannot read {self.path}: {exc}") from exc

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MalformedStoreResponse(f"{self.path} is not valid JSON") from exc
        return parse_permissions(payload)

    def _write(self, records: list[dict[str, str]]) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=self.path.name + ".",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(records, tmp, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreUnreachable(f"Cannot write {self.path}: {exc}") from exc


class InMemoryPermissionStore(PermissionStore):
    """Keeps the table in process memory. `saves` records every bulk_save payload."""

    def __init__(self, permissions: Iterable[NavigationPermission] = ()):
        self._permissions = list(permissions)
        self.saves: list[list[NavigationPermission]] = []

    async def load(self) -> list[NavigationPermission]:
        # same strictness as the other backends: duplicate pairs are malformed
        return parse_permissions(_to_wire(self._permissions))

    async def bulk_save(self, permissions: list[NavigationPermission]) -> None:
        self._permissions = list(permissions)
        self.saves.append(list(permissions))


def build_permission_store(settings: Settings) -> PermissionStore:
    """Pick the backend named by PERMISSION_STORE_BACKEND."""
    backend = settings.permission_store_backend
    if backend == "remote":
        return RemotePermissionStore(
            settings.permission_store_url,
            timeout=settings.permission_store_timeout,
        )
    if backend == "file":
        return FilePermissionStore(settings.permission_store_file)
    if backend == "memory":
        return InMemoryPermissionStore()
    raise ValueError(f"Unknown permission store backend: {backend!r}")
