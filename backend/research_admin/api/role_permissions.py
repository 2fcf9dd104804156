"""
Role Permissions API — the permission store behind navigation visibility.

GET  /api/role-permissions                         full collection
POST /api/role-permissions/bulk                    replace the whole collection
POST /api/role-permissions                         create one row
PUT  /api/role-permissions/{job_title}/{item}      change one row's access level

Writes are guarded by the caller's own access to the Scientists & Staff
section, where the role access configuration page lives.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from research_admin.api.deps import get_db, require_navigation
from research_admin.middleware.metrics import role_permission_writes_total
from research_admin.schemas.schemas import (
    AccessLevelUpdate,
    BulkReplaceRequest,
    RolePermissionCreate,
    RolePermissionOut,
)
from research_admin.services.role_permission_service import (
    RolePermissionExists,
    RolePermissionService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/role-permissions", tags=["role-permissions"])

CONFIG_SECTION = "scientists"


# ── GET /api/role-permissions — full collection ─────────────────────────────

@router.get("", response_model=list[RolePermissionOut])
async def list_role_permissions(db: AsyncSession = Depends(get_db)):
    """Return every stored (job title, navigation item) → access level row."""
    return await RolePermissionService(db).list_all()


# ── POST /api/role-permissions/bulk — whole-table replace ───────────────────

@router.post("/bulk", response_model=list[RolePermissionOut])
async def bulk_replace_role_permissions(
    body: BulkReplaceRequest,
    job_title: str | None = Depends(require_navigation(CONFIG_SECTION, edit=True)),
    db: AsyncSession = Depends(get_db),
):
    """Overwrite the entire collection. Last writer wins."""
    rows = await RolePermissionService(db).replace_all(body.permissions)
    role_permission_writes_total.labels(operation="bulk_replace").inc()
    logger.info("Role permissions replaced: %d rows by %s", len(rows), job_title or "anonymous")
    return rows


# ── POST /api/role-permissions — single row ─────────────────────────────────

@router.post("", response_model=RolePermissionOut, status_code=201)
async def create_role_permission(
    body: RolePermissionCreate,
    job_title: str | None = Depends(require_navigation(CONFIG_SECTION, edit=True)),
    db: AsyncSession = Depends(get_db),
):
    try:
        row = await RolePermissionService(db).create(body.job_title, body.navigation_item, body.access_level)
    except RolePermissionExists:
        raise HTTPException(
            status_code=409,
            detail=f"Permission for {body.job_title} on {body.navigation_item} already exists",
        )
    role_permission_writes_total.labels(operation="create").inc()
    logger.info(
        "Role permission created: %s/%s=%s by %s",
        row.job_title, row.navigation_item, row.access_level, job_title or "anonymous",
    )
    return row


# ── PUT /api/role-permissions/{job_title}/{navigation_item} ─────────────────

@router.put("/{target_job_title}/{navigation_item}", response_model=RolePermissionOut)
async def update_role_permission(
    target_job_title: str,
    navigation_item: str,
    body: AccessLevelUpdate,
    job_title: str | None = Depends(require_navigation(CONFIG_SECTION, edit=True)),
    db: AsyncSession = Depends(get_db),
):
    row = await RolePermissionService(db).update_access_level(
        target_job_title, navigation_item, body.access_level,
    )
    if row is None:
        raise HTTPException(status_code=404, detail="Role permission not found")

    role_permission_writes_total.labels(operation="update").inc()
    logger.info(
        "Role permission updated: %s/%s=%s by %s",
        row.job_title, row.navigation_item, row.access_level, job_title or "anonymous",
    )
    return row
