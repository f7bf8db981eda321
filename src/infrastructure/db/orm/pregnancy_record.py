from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base

_OPEN_STATUSES = text("pregnancy_status IN ('suspected', 'confirmed')")


class PregnancyRecordORM(Base):
    __tablename__ = "pregnancy_records"
    __table_args__ = (
        Index("ix_pregnancy_records_farm_animal", "farm_id", "animal_id"),
        # At most one open pregnancy per animal
        Index(
            "ux_pregnancy_records_open_per_animal",
            "farm_id",
            "animal_id",
            unique=True,
            postgresql_where=_OPEN_STATUSES,
            sqlite_where=_OPEN_STATUSES,
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    animal_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False
    )
    breeding_record_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("breeding_records.id"), nullable=False, unique=True
    )
    pregnancy_status: Mapped[str] = mapped_column(String(16), nullable=False, default="suspected")
    expected_calving_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    actual_calving_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    gestation_length: Mapped[int | None] = mapped_column(Integer, nullable=True)
    confirmed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    confirmation_method: Mapped[str | None] = mapped_column(String(64), nullable=True)
    veterinarian: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
