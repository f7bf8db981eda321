from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    DECIMAL,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class AnimalORM(Base):
    __tablename__ = "animals"
    __table_args__ = (
        UniqueConstraint("farm_id", "tag", name="ux_animals_farm_tag"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    tag: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sex: Mapped[str | None] = mapped_column(String(6), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    birth_weight: Mapped[Decimal | None] = mapped_column(DECIMAL(8, 2), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")
    source: Mapped[str | None] = mapped_column(String(16), nullable=True)
    dam_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Breeding / production state
    production_status: Mapped[str | None] = mapped_column(String(16), nullable=True, index=True)
    service_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expected_calving_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    days_in_milk: Mapped[int | None] = mapped_column(Integer, nullable=True)
    lactation_number: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    current_daily_production: Mapped[Decimal | None] = mapped_column(
        DECIMAL(8, 2), nullable=True
    )

    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
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
