"""
Seed the role_permissions table with the default navigation permissions.

Usage:
    python -m research_admin.seed.role_permissions            # Seed if empty
    python -m research_admin.seed.role_permissions --clean    # Overwrite with defaults
    python -m research_admin.seed.role_permissions --verify   # Just verify existing data

Web clients seed an empty store on their own first load; this script is
for preparing a database ahead of time.
"""

import asyncio
import sys

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from research_admin.config import settings
from research_admin.models import RolePermission
from research_admin.navigation.catalog import JOB_TITLES, NAVIGATION_ITEMS
from research_admin.navigation.defaults import generate_defaults
from research_admin.services.role_permission_service import RolePermissionService


async def count_rows(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(RolePermission))
    return result.scalar() or 0


async def seed_role_permissions(session: AsyncSession, clean: bool = False) -> int:
    """Write the default table unless rows already exist. Returns rows written."""
    if not clean and await count_rows(session) > 0:
        return 0
    rows = await RolePermissionService(session).replace_all(generate_defaults())
    return len(rows)


async def verify_role_permissions(session: AsyncSession) -> bool:
    """Check that every known (job title, navigation item) pair has a row."""
    rows = await RolePermissionService(session).list_all()
    stored = {(r.job_title, r.navigation_item) for r in rows}
    expected = {(j, n) for j in JOB_TITLES for n in NAVIGATION_ITEMS}
    missing = expected - stored
    extra = stored - expected

    print(f"  role_permissions rows: {len(rows):,} (expected {len(expected):,})")
    if missing:
        print(f"  Missing pairs: {len(missing)}")
    if extra:
        print(f"  Pairs outside the catalog: {len(extra)}")
    return not missing


async def run_seed():
    """Main seed entry point."""
    engine = create_async_engine(settings.database_url, echo=False)
    async_sess = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    clean = "--clean" in sys.argv
    verify_only = "--verify" in sys.argv

    async with async_sess() as session:
        if verify_only:
            ok = await verify_role_permissions(session)
            await engine.dispose()
            sys.exit(0 if ok else 1)

        written = await seed_role_permissions(session, clean=clean)
        if written:
            await session.commit()
            print(f"Seeded {written:,} role permissions.")
        else:
            print("Role permissions already seeded. Use --clean to reset to defaults.")

        ok = await verify_role_permissions(session)

    await engine.dispose()
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    asyncio.run(run_seed())
