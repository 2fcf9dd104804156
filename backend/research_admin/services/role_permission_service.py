"""
Role Permission Service — durable storage behind the role-permissions API.

The web client treats this table as one document: it loads all rows at
startup and writes the whole table back on every change (bulk replace).
Single-row create/update exist for admin tooling.
"""

from sqlalchemy import TextClause, delete, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from research_admin.config import settings
from research_admin.models import RolePermission
from research_admin.navigation.catalog import AccessLevel
from research_admin.navigation.models import NavigationPermission
from research_admin.navigation.resolver import PermissionResolver


class RolePermissionExists(Exception):
    """A row for this (job title, navigation item) pair already exists."""


def replace_lock_statement(dialect_name: str) -> TextClause | None:
    """
    Statement that serializes concurrent bulk replaces, or None.

    On PostgreSQL a second replace would otherwise run its DELETE against a
    snapshot that cannot see the first replace's new rows, and its INSERT
    would trip the unique constraint. EXCLUSIVE mode still lets readers in.
    SQLite serializes writers on its own.
    """
    if dialect_name == "postgresql":
        return text(f"LOCK TABLE {RolePermission.__tablename__} IN EXCLUSIVE MODE")
    return None


class RolePermissionService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> list[RolePermission]:
        result = await self.session.execute(
            select(RolePermission).order_by(RolePermission.id)
        )
        return list(result.scalars().all())

    async def get(self, job_title: str, navigation_item: str) -> RolePermission | None:
        result = await self.session.execute(
            select(RolePermission).where(
                RolePermission.job_title == job_title,
                RolePermission.navigation_item == navigation_item,
            )
        )
        return result.scalar_one_or_none()

    async def create(self, job_title: str, navigation_item: str, access_level: AccessLevel) -> RolePermission:
        if await self.get(job_title, navigation_item) is not None:
            raise RolePermissionExists(f"{job_title}-{navigation_item}")

        row = RolePermission(
            job_title=job_title,
            navigation_item=navigation_item,
            access_level=AccessLevel(access_level).value,
        )
        self.session.add(row)
        await self.session.flush()
        return row

    async def update_access_level(
        self, job_title: str, navigation_item: str, access_level: AccessLevel,
    ) -> RolePermission | None:
        row = await self.get(job_title, navigation_item)
        if row is None:
            return None
        row.access_level = AccessLevel(access_level).value
        await self.session.flush()
        return row

    async def replace_all(self, permissions: list[NavigationPermission]) -> list[RolePermission]:
        """Delete every row and insert the given table. Runs inside the caller's transaction."""
        lock = replace_lock_statement(self.session.get_bind().dialect.name)
        if lock is not None:
            await self.session.execute(lock)
        await self.session.execute(delete(RolePermission))
        rows = [
            RolePermission(
                job_title=p.job_title,
                navigation_item=p.navigation_item,
                access_level=p.access_level.value,
            )
            for p in permissions
        ]
        self.session.add_all(rows)
        await self.session.flush()
        return rows

    async def resolver(self) -> PermissionResolver:
        """A resolver over the stored table, for server-side guards and menus."""
        rows = await self.list_all()
        return PermissionResolver(
            (
                NavigationPermission(
                    job_title=r.job_title,
                    navigation_item=r.navigation_item,
                    access_level=r.access_level,
                )
                for r in rows
            ),
            default_level=settings.unknown_access_level,
        )
