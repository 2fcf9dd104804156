"""
Navigation permissions — which job titles see which sections, and how.

Components:
    catalog   — AccessLevel, JOB_TITLES, NAVIGATION_ITEMS (closed sets)
    defaults  — per-role default table for seeding and reset
    models    — NavigationPermission record and strict payload parsing
    resolver  — total lookup plus can_view / can_edit / is_hidden / is_read_only
    stores    — remote (HTTP), file, and in-memory persistence backends
    session   — load/seed on startup, fire-and-forget bulk saves on update
    elements  — element flags and menu building for rendering code
"""

from research_admin.navigation.catalog import (
    AccessLevel, JOB_TITLES, NAVIGATION_CATALOG, NAVIGATION_ITEMS, NavigationItem,
)
from research_admin.navigation.defaults import ROLE_DEFAULTS, default_access_level, generate_defaults
from research_admin.navigation.elements import ElementPermissions, MenuEntry, element_permissions, navigation_menu
from research_admin.navigation.errors import (
    DuplicatePermissionError, MalformedStoreResponse, PermissionStoreError, StoreUnreachable,
)
from research_admin.navigation.models import NavigationPermission, parse_permissions
from research_admin.navigation.resolver import PermissionResolver
from research_admin.navigation.session import LoadOutcome, PermissionSession, session_from_settings
from research_admin.navigation.stores import (
    FilePermissionStore, InMemoryPermissionStore, PermissionStore, RemotePermissionStore,
    build_permission_store,
)

__all__ = [
    "AccessLevel", "JOB_TITLES", "NAVIGATION_CATALOG", "NAVIGATION_ITEMS", "NavigationItem",
    "ROLE_DEFAULTS", "default_access_level", "generate_defaults",
    "ElementPermissions", "MenuEntry", "element_permissions", "navigation_menu",
    "DuplicatePermissionError", "MalformedStoreResponse", "PermissionStoreError", "StoreUnreachable",
    "NavigationPermission", "parse_permissions",
    "PermissionResolver",
    "LoadOutcome", "PermissionSession", "session_from_settings",
    "FilePermissionStore", "InMemoryPermissionStore", "PermissionStore", "RemotePermissionStore",
    "build_permission_store",
]
