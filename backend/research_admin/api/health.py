"""
Operational endpoints: GET /api/health and GET /metrics (Prometheus text format).
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from research_admin.api.deps import get_db
from research_admin.config import settings
from research_admin.models import RolePermission

logger = logging.getLogger(__name__)

router = APIRouter(tags=["operations"])


@router.get("/api/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    components: dict = {}

    try:
        count = (await db.execute(
            select(func.count()).select_from(RolePermission)
        )).scalar()
        components["database"] = {"status": "connected"}
        # An empty table is fine: the first client session seeds it
        components["role_permissions"] = {"status": "seeded" if count else "empty", "rows": count}
    except Exception as exc:
        logger.warning("Health check: database unavailable: %s", exc)
        components["database"] = {"status": "disconnected", "error": str(exc)}

    overall = "healthy" if components["database"]["status"] == "connected" else "unhealthy"
    return {
        "status": overall,
        "environment": settings.environment,
        "components": components,
    }


@router.get("/metrics")
async def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
