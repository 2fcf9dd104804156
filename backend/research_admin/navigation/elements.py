"""Helpers for rendering code: per-element flags and the visible navigation menu."""

from dataclasses import dataclass

from research_admin.navigation.catalog import AccessLevel, NAVIGATION_CATALOG, NavigationItem
from research_admin.navigation.resolver import PermissionResolver

READ_ONLY_CLASS = "read-only"


@dataclass(frozen=True)
class ElementPermissions:
    is_hidden: bool
    is_read_only: bool
    can_edit: bool

    @property
    def should_hide_edit_buttons(self) -> bool:
        return not self.can_edit

    @property
    def read_only_class(self) -> str:
        return READ_ONLY_CLASS if self.is_read_only else ""


def element_permissions(resolver: PermissionResolver, job_title: str, navigation_item: str) -> ElementPermissions:
    return ElementPermissions(
        is_hidden=resolver.is_hidden(job_title, navigation_item),
        is_read_only=resolver.is_read_only(job_title, navigation_item),
        can_edit=resolver.can_edit(job_title, navigation_item),
    )


@dataclass(frozen=True)
class MenuEntry:
    item: NavigationItem
    access_level: AccessLevel

    @property
    def read_only(self) -> bool:
        return self.access_level == AccessLevel.VIEW


def navigation_menu(
    resolver: PermissionResolver,
    job_title: str,
    catalog: tuple[NavigationItem, ...] = NAVIGATION_CATALOG,
) -> list[MenuEntry]:
    """Catalog entries the role can see, in catalog order. Hidden items are left out."""
    return [
        MenuEntry(item=item, access_level=resolver.get_access_level(job_title, item.id))
        for item in catalog
        if resolver.can_view(job_title, item.id)
    ]
