from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    DECIMAL,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class BreedingRecordORM(Base):
    __tablename__ = "breeding_records"
    __table_args__ = (
        Index("ix_breeding_records_farm_animal_date", "farm_id", "animal_id", "breeding_date"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    animal_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False
    )
    breeding_date: Mapped[date] = mapped_column(Date, nullable=False)
    breeding_method: Mapped[str] = mapped_column(String(32), nullable=False)
    sire_tag: Mapped[str | None] = mapped_column(String(128), nullable=True)
    sire_breed: Mapped[str | None] = mapped_column(String(128), nullable=True)
    technician: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cost: Mapped[Decimal | None] = mapped_column(DECIMAL(10, 2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    pregnancy_status: Mapped[str] = mapped_column(
        String(16), nullable=False, default="pending"
    )
    auto_generated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )
    # Timeline entry this record mirrors, when it was synthesized from one
    breeding_event_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    created_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
