from datetime import datetime

from sqlalchemy import CheckConstraint, String, DateTime, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from research_admin.database import Base


class RolePermission(Base):
    __tablename__ = "role_permissions"
    __table_args__ = (
        UniqueConstraint("job_title", "navigation_item", name="uq_role_permissions_job_title_item"),
        CheckConstraint("access_level IN ('hide', 'view', 'edit')", name="ck_role_permissions_access_level"),
    )
    # server timestamps are loaded back on flush
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    job_title: Mapped[str] = mapped_column(String(100), index=True)
    navigation_item: Mapped[str] = mapped_column(String(100))
    access_level: Mapped[str] = mapped_column(String(10), default="edit")  # "hide" | "view" | "edit"
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())
