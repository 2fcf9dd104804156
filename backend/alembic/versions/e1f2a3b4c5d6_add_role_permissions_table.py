"""Add role_permissions table

Revision ID: e1f2a3b4c5d6
Revises:
Create Date: 2026-10-19 10:00:00.000000

Creates the navigation permission store: one row per
(job_title, navigation_item) pair. The table starts empty; the first
client session (or the seed script) fills it with defaults.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "e1f2a3b4c5d6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "role_permissions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("job_title", sa.String(100), nullable=False),
        sa.Column("navigation_item", sa.String(100), nullable=False),
        sa.Column("access_level", sa.String(10), nullable=False, server_default="edit"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("job_title", "navigation_item", name="uq_role_permissions_job_title_item"),
        sa.CheckConstraint("access_level IN ('hide', 'view', 'edit')", name="ck_role_permissions_access_level"),
    )
    op.create_index("ix_role_permissions_job_title", "role_permissions", ["job_title"])


def downgrade() -> None:
    op.drop_index("ix_role_permissions_job_title", table_name="role_permissions")
    op.drop_table("role_permissions")
