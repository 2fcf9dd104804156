"""
PermissionSession — keeps one resolver in sync with one permission store.

A session is created once per UI session and closed on logout. It owns the
authoritative in-memory table; the store owns the durable copy.

Startup (load):
    store empty, unreachable, or malformed → generate defaults, seed them
    store has records                      → use them verbatim, no merging
    Any other store error is logged and handled like an unreachable store.

Updates (update / set_access_level / reset_to_defaults):
    the in-memory table changes immediately, then the full table is
    bulk-saved in a background task. Saves reach the store one at a time,
    in the order the edits were made. A failed save is logged and dropped:
    never retried, never rolled back.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from research_admin.middleware.metrics import permission_store_failures_total
from research_admin.navigation.catalog import AccessLevel
from research_admin.navigation.defaults import generate_defaults
from research_admin.navigation.errors import (
    DuplicatePermissionError,
    MalformedStoreResponse,
    PermissionStoreError,
    StoreUnreachable,
)
from research_admin.navigation.models import NavigationPermission, ensure_unique
from research_admin.navigation.resolver import PermissionResolver
from research_admin.navigation.stores import PermissionStore, build_permission_store

if TYPE_CHECKING:
    from research_admin.config import Settings

logger = logging.getLogger(__name__)


class LoadOutcome(str, Enum):
    STORED = "stored"        # store had records, used verbatim
    SEEDED = "seeded"        # defaults generated and persisted
    DEFAULTS = "defaults"    # defaults generated, seeding failed


class PermissionSession:
    def __init__(
        self,
        store: PermissionStore,
        default_level: AccessLevel = AccessLevel.EDIT,
    ):
        self.store = store
        self.resolver = PermissionResolver(default_level=default_level)
        self.loaded = False
        self._pending: set[asyncio.Task] = set()
        self._save_lock = asyncio.Lock()

    async def __aenter__(self) -> PermissionSession:
        await self.load()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def permissions(self) -> list[NavigationPermission]:
        return self.resolver.permissions

    # ── Startup ──────────────────────────────────────────────────────────────

    async def load(self) -> LoadOutcome:
        """Load the table from the store, seeding defaults when there is nothing usable."""
        try:
            stored = await self.store.load()
            ensure_unique(stored)
        except StoreUnreachable as exc:
            logger.warning("Permission store unreachable, using defaults: %s", exc)
            permission_store_failures_total.labels(operation="load").inc()
            stored = []
        except (MalformedStoreResponse, DuplicatePermissionError) as exc:
            logger.warning("Permission store returned malformed data, reseeding: %s", exc)
            permission_store_failures_total.labels(operation="load").inc()
            stored = []
        except Exception:
            logger.exception("Unexpected error loading navigation permissions, using defaults")
            permission_store_failures_total.labels(operation="load").inc()
            stored = []

        if stored:
            self.resolver.replace(stored)
            self.loaded = True
            logger.info("Loaded %d navigation permissions from store", len(stored))
            return LoadOutcome.STORED

        defaults = generate_defaults()
        self.resolver.replace(defaults)
        self.loaded = True

        try:
            await self.store.bulk_save(defaults)
        except PermissionStoreError as exc:
            logger.warning("Seeding default permissions failed, keeping them in memory: %s", exc)
            permission_store_failures_total.labels(operation="seed").inc()
            return LoadOutcome.DEFAULTS
        except Exception:
            logger.exception("Unexpected error seeding default permissions")
            permission_store_failures_total.labels(operation="seed").inc()
            return LoadOutcome.DEFAULTS

        logger.info("Seeded %d default navigation permissions", len(defaults))
        return LoadOutcome.SEEDED

    # ── Updates ──────────────────────────────────────────────────────────────

    def update(self, permissions: Iterable[NavigationPermission]) -> None:
        """
        Replace the whole table and persist it in the background.

        Must be called from a running event loop. Raises
        DuplicatePermissionError (before touching anything) if the new
        table repeats a pair.
        """
        snapshot = list(permissions)
        ensure_unique(snapshot)
        self.resolver.replace(snapshot)

        task = asyncio.get_running_loop().create_task(self._save(snapshot))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def set_access_level(self, job_title: str, navigation_item: str, access_level: AccessLevel) -> None:
        """Change one pair; the whole table is still what gets saved."""
        access_level = AccessLevel(access_level)
        updated = []
        found = False
        for perm in self.resolver.permissions:
            if perm.key == (job_title, navigation_item):
                updated.append(perm.with_access_level(access_level))
                found = True
            else:
                updated.append(perm)
        if not found:
            updated.append(NavigationPermission(
                job_title=job_title,
                navigation_item=navigation_item,
                access_level=access_level,
            ))
        self.update(updated)

    def reset_to_defaults(self) -> None:
        self.update(generate_defaults())

    async def _save(self, snapshot: list[NavigationPermission]) -> None:
        # lock waiters are woken in FIFO order, so saves land in edit order
        async with self._save_lock:
            try:
                await self.store.bulk_save(snapshot)
            except PermissionStoreError as exc:
                logger.warning("Saving navigation permissions failed, change kept in memory only: %s", exc)
                permission_store_failures_total.labels(operation="save").inc()
            except Exception:
                logger.exception("Unexpected error saving navigation permissions")
                permission_store_failures_total.labels(operation="save").inc()

    async def wait_for_pending_saves(self) -> None:
        """Await every save scheduled so far."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # ── Teardown ─────────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self.wait_for_pending_saves()
        self.resolver.clear()
        self.loaded = False
        await self.store.aclose()


def session_from_settings(settings: Settings) -> PermissionSession:
    """A fresh, not-yet-loaded session wired to the configured store backend."""
    return PermissionSession(
        build_permission_store(settings),
        default_level=settings.unknown_access_level,
    )
