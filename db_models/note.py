# db_models/note.py
import uuid
from typing import Optional
from datetime import datetime

from sqlalchemy import Text, DateTime, ForeignKey, Uuid, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow


class Note(Base):
    __tablename__ = "notes"
    __table_args__ = (
        Index("notes_created_at_idx", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # At least one of these is set when the note is created. Parent deletes
    # null them individually without re-checking that rule.
    asset_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("assets.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    case_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("cases.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

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

    asset: Mapped[Optional["Asset"]] = relationship("Asset", back_populates="notes")
    project: Mapped[Optional["Project"]] = relationship("Project", back_populates="notes")
    case: Mapped[Optional["Case"]] = relationship("Case", back_populates="notes")

    @property
    def is_orphaned(self) -> bool:
        return self.asset_id is None and self.project_id is None and self.case_id is None
