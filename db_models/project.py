# db_models/project.py
import uuid
from typing import Optional
from datetime import datetime
from enum import Enum

from sqlalchemy import String, Text, DateTime, ForeignKey, Uuid, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Project(Base):
    __tablename__ = "projects"
    __table_args__ = (
        Index("projects_name_idx", "name"),
        Index("projects_status_idx", "status"),
        Index("projects_created_at_idx", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ProjectStatus.PLANNING.value,
        server_default=ProjectStatus.PLANNING.value,
    )

    # Single assignment: assigned_at is non-null exactly when asset_id is.
    asset_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("assets.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    assigned_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    # Relationships
    asset: Mapped[Optional["Asset"]] = relationship(
        "Asset",
        back_populates="projects",
    )
    cases: Mapped[list["Case"]] = relationship(
        "Case",
        back_populates="project",
        passive_deletes=True,
    )
    notes: Mapped[list["Note"]] = relationship(
        "Note",
        back_populates="project",
        passive_deletes=True,
    )
