# db_models/case.py
import uuid
from typing import Optional
from datetime import datetime

from sqlalchemy import Text, DateTime, ForeignKey, Uuid, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow


class Case(Base):
    """Legal / administrative case record (regional trial court docket)."""

    __tablename__ = "cases"
    __table_args__ = (
        Index("cases_rtc_idx", "rtc"),
        Index("cases_case_no_idx", "case_no"),
        Index("cases_judge_idx", "judge"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    rtc: Mapped[str] = mapped_column(Text, nullable=False)
    case_no: Mapped[str] = mapped_column(Text, nullable=False)
    last_updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    judge: Mapped[str | None] = mapped_column(Text, nullable=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Both links are optional and independent of each other
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

    asset: Mapped[Optional["Asset"]] = relationship("Asset", back_populates="cases")
    project: Mapped[Optional["Project"]] = relationship("Project", back_populates="cases")
    notes: Mapped[list["Note"]] = relationship(
        "Note",
        back_populates="case",
        passive_deletes=True,
    )
