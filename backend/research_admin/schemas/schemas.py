"""
Pydantic schemas for API request/response models.

Role-permission payloads use the camelCase keys the web client sends
(jobTitle, navigationItem, accessLevel).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from research_admin.navigation.catalog import AccessLevel
from research_admin.navigation.models import NavigationPermission, ensure_unique


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ── Role permissions ──

class RolePermissionOut(_CamelModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    job_title: str = Field(serialization_alias="jobTitle")
    navigation_item: str = Field(serialization_alias="navigationItem")
    access_level: AccessLevel = Field(serialization_alias="accessLevel")
    created_at: datetime | None = Field(None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(None, serialization_alias="updatedAt")


class RolePermissionCreate(_CamelModel):
    job_title: str = Field(alias="jobTitle", min_length=1, max_length=100)
    navigation_item: str = Field(alias="navigationItem", min_length=1, max_length=100)
    access_level: AccessLevel = Field(AccessLevel.EDIT, alias="accessLevel")


class AccessLevelUpdate(_CamelModel):
    access_level: AccessLevel = Field(alias="accessLevel")


class BulkReplaceRequest(BaseModel):
    permissions: list[NavigationPermission]

    @field_validator("permissions")
    @classmethod
    def _unique_pairs(cls, permissions: list[NavigationPermission]) -> list[NavigationPermission]:
        ensure_unique(permissions)
        return permissions


# ── Navigation ──

class NavigationItemOut(BaseModel):
    id: str
    name: str
    description: str


class NavigationCatalogResponse(BaseModel):
    job_titles: list[str]
    navigation_items: list[NavigationItemOut]
    access_levels: list[AccessLevel]


class MenuEntryOut(NavigationItemOut):
    access_level: AccessLevel
    read_only: bool


class NavigationMenuResponse(BaseModel):
    job_title: str
    items: list[MenuEntryOut]
