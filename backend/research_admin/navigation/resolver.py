"""
PermissionResolver — the runtime lookup used by every guarded element.

The resolver is a total function from (job title, navigation item) to an
access level. Pairs with no record resolve to the fallback level, which is
`edit` unless configured otherwise. That fallback is fail-open: this is a
navigation convenience, not an authorization boundary.
"""

from __future__ import annotations

from collections.abc import Iterable

from research_admin.navigation.catalog import AccessLevel
from research_admin.navigation.models import NavigationPermission, ensure_unique


class PermissionResolver:
    def __init__(
        self,
        permissions: Iterable[NavigationPermission] = (),
        default_level: AccessLevel = AccessLevel.EDIT,
    ):
        self.default_level = AccessLevel(default_level)
        self._permissions: list[NavigationPermission] = []
        self._index: dict[tuple[str, str], AccessLevel] = {}
        self.replace(permissions)

    @property
    def permissions(self) -> list[NavigationPermission]:
        return list(self._permissions)

    def __len__(self) -> int:
        return len(self._permissions)

    def replace(self, permissions: Iterable[NavigationPermission]) -> None:
        """Swap in a whole new table. Raises DuplicatePermissionError on repeated pairs."""
        permissions = list(permissions)
        ensure_unique(permissions)
        self._permissions = permissions
        self._index = {p.key: p.access_level for p in permissions}

    def clear(self) -> None:
        self.replace(())

    def get_access_level(self, job_title: str, navigation_item: str) -> AccessLevel:
        return self._index.get((job_title, navigation_item), self.default_level)

    def can_view(self, job_title: str, navigation_item: str) -> bool:
        return self.get_access_level(job_title, navigation_item) in (AccessLevel.VIEW, AccessLevel.EDIT)

    def can_edit(self, job_title: str, navigation_item: str) -> bool:
        return self.get_access_level(job_title, navigation_item) == AccessLevel.EDIT

    def is_hidden(self, job_title: str, navigation_item: str) -> bool:
        return self.get_access_level(job_title, navigation_item) == AccessLevel.HIDE

    def is_read_only(self, job_title: str, navigation_item: str) -> bool:
        return self.get_access_level(job_title, navigation_item) == AccessLevel.VIEW
