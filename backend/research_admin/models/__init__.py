from research_admin.models.role_permission import RolePermission  # noqa: F401
