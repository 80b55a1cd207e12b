# db_models/asset.py
import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import String, Text, Float, DateTime, Uuid, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow


class AssetStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"


class Asset(Base):
    __tablename__ = "assets"
    __table_args__ = (
        Index("assets_name_idx", "name"),
        Index("assets_status_idx", "status"),
        Index("assets_created_at_idx", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Property / legal attributes (tax declaration, title, auction data)
    tax_dec_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    declared_owner: Mapped[str | None] = mapped_column(Text, nullable=True)
    market_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    assessed_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    car_status: Mapped[str | None] = mapped_column(Text, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    tax_declaration_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    tct_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    area_per_sq_m: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_of_property: Mapped[str | None] = mapped_column(Text, nullable=True)
    barangay: Mapped[str | None] = mapped_column(Text, nullable=True)
    bidder: Mapped[str | None] = mapped_column(Text, nullable=True)
    auction_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    date_of_certification_of_sale: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    entry_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    details_short_update_log: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Geo location
    location_lat: Mapped[float] = mapped_column(Float, nullable=False)
    location_lng: Mapped[float] = mapped_column(Float, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssetStatus.ACTIVE.value,
        server_default=AssetStatus.ACTIVE.value,
    )

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

    # Dependents are detached with explicit UPDATE statements before delete,
    # so the ORM never loads these collections to null them itself.
    projects: Mapped[list["Project"]] = relationship(
        "Project",
        back_populates="asset",
        passive_deletes=True,
    )
    cases: Mapped[list["Case"]] = relationship(
        "Case",
        back_populates="asset",
        passive_deletes=True,
    )
    notes: Mapped[list["Note"]] = relationship(
        "Note",
        back_populates="asset",
        passive_deletes=True,
    )
