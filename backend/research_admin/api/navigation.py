"""
Navigation API — the catalog and a per-role menu resolved from the stored table.

The menu endpoint is what navigation rendering consumes: it only ever
asks the resolver, never reads role_permissions rows directly.
"""

from fastapi import APIRouter, Depends, Query

from research_admin.api.deps import get_resolver
from research_admin.navigation.catalog import AccessLevel, JOB_TITLES, NAVIGATION_CATALOG
from research_admin.navigation.elements import navigation_menu
from research_admin.navigation.resolver import PermissionResolver
from research_admin.schemas.schemas import (
    MenuEntryOut,
    NavigationCatalogResponse,
    NavigationItemOut,
    NavigationMenuResponse,
)

router = APIRouter(prefix="/api/navigation", tags=["navigation"])


@router.get("/catalog", response_model=NavigationCatalogResponse)
async def get_catalog():
    """Job titles, navigation items and access levels the admin matrix is built from."""
    return NavigationCatalogResponse(
        job_titles=list(JOB_TITLES),
        navigation_items=[
            NavigationItemOut(id=item.id, name=item.name, description=item.description)
            for item in NAVIGATION_CATALOG
        ],
        access_levels=list(AccessLevel),
    )


@router.get("", response_model=NavigationMenuResponse)
async def get_menu(
    job_title: str = Query(..., min_length=1),
    resolver: PermissionResolver = Depends(get_resolver),
):
    entries = navigation_menu(resolver, job_title)
    return NavigationMenuResponse(
        job_title=job_title,
        items=[
            MenuEntryOut(
                id=e.item.id,
                name=e.item.name,
                description=e.item.description,
                access_level=e.access_level,
                read_only=e.read_only,
            )
            for e in entries
        ],
    )
