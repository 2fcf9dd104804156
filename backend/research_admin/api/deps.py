"""
API Dependencies — DB session, caller job title, navigation guards.

Navigation guards are a convenience layer, not authorization: a request
without an X-Job-Title header passes, and pairs missing from the stored
table resolve to the configured fallback level (edit by default).
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from research_admin.database import async_session
from research_admin.middleware.metrics import navigation_guard_denials_total
from research_admin.navigation.resolver import PermissionResolver
from research_admin.services.role_permission_service import RolePermissionService

logger = logging.getLogger(__name__)

JOB_TITLE_HEADER = "X-Job-Title"


# ── Database session ─────────────────────────────────────────────────────────

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session per request, commit on success, rollback on error."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ── Caller context ───────────────────────────────────────────────────────────

async def get_job_title(
    x_job_title: str | None = Header(None, alias=JOB_TITLE_HEADER),
) -> str | None:
    if x_job_title is None:
        return None
    return x_job_title.strip() or None


async def get_resolver(db: AsyncSession = Depends(get_db)) -> PermissionResolver:
    return await RolePermissionService(db).resolver()


# ── Navigation guards ────────────────────────────────────────────────────────

def require_navigation(navigation_item: str, edit: bool = False):
    """
    FastAPI dependency that refuses callers whose job title cannot see
    (or, with edit=True, cannot edit) the given navigation item.

    Usage:
        @router.post("/bulk")
        async def bulk_replace(job_title: str | None = Depends(require_navigation("scientists", edit=True))):
            ...
    """
    async def _check(
        job_title: str | None = Depends(get_job_title),
        resolver: PermissionResolver = Depends(get_resolver),
    ) -> str | None:
        if job_title is None:
            return None

        if resolver.is_hidden(job_title, navigation_item):
            navigation_guard_denials_total.labels(navigation_item=navigation_item, reason="hidden").inc()
            logger.info("Navigation guard: %s cannot see %s", job_title, navigation_item)
            raise HTTPException(
                status_code=403,
                detail=f"{navigation_item} is not available to {job_title}",
            )
        if edit and not resolver.can_edit(job_title, navigation_item):
            navigation_guard_denials_total.labels(navigation_item=navigation_item, reason="read_only").inc()
            logger.info("Navigation guard: %s has read-only access to %s", job_title, navigation_item)
            raise HTTPException(
                status_code=403,
                detail=f"{navigation_item} is read-only for {job_title}",
            )
        return job_title
    return _check
