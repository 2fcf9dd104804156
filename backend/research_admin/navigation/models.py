"""
NavigationPermission — one (job title, navigation item) → access level row.

The wire format uses camelCase keys (jobTitle, navigationItem, accessLevel);
Python code uses the snake_case attribute names. Records loaded from a
store go through parse_permissions(), which either returns a clean list or
rejects the whole batch.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from research_admin.navigation.catalog import AccessLevel
from research_admin.navigation.errors import DuplicatePermissionError, MalformedStoreResponse


class NavigationPermission(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    job_title: str = Field(alias="jobTitle", min_length=1)
    navigation_item: str = Field(alias="navigationItem", min_length=1)
    access_level: AccessLevel = Field(alias="accessLevel")

    @property
    def key(self) -> tuple[str, str]:
        return (self.job_title, self.navigation_item)

    @property
    def id(self) -> str:
        """Composite key, e.g. "PhD Student-contracts"."""
        return f"{self.job_title}-{self.navigation_item}"

    def with_access_level(self, access_level: AccessLevel) -> "NavigationPermission":
        return self.model_copy(update={"access_level": AccessLevel(access_level)})

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True, mode="json")


_PERMISSION_LIST = TypeAdapter(list[NavigationPermission])


def ensure_unique(permissions: Iterable[NavigationPermission]) -> None:
    """Raise DuplicatePermissionError on the first repeated pair."""
    seen: set[tuple[str, str]] = set()
    for perm in permissions:
        if perm.key in seen:
            raise DuplicatePermissionError(perm.job_title, perm.navigation_item)
        seen.add(perm.key)


def parse_permissions(data: Any) -> list[NavigationPermission]:
    """
    Strictly deserialize a raw store payload.

    Any malformed record, a non-list container, or a repeated pair rejects
    the whole batch with MalformedStoreResponse.
    """
    if not isinstance(data, list):
        raise MalformedStoreResponse(
            f"Expected a list of permissions, got {type(data).__name__}"
        )
    try:
        permissions = _PERMISSION_LIST.validate_python(data)
    except ValidationError as exc:
        raise MalformedStoreResponse(
            f"Invalid permission records: {exc.error_count()} error(s)"
        ) from exc
    try:
        ensure_unique(permissions)
    except DuplicatePermissionError as exc:
        raise MalformedStoreResponse(str(exc)) from exc
    return permissions
