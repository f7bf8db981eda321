from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Integer, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class FarmBreedingSettingsORM(Base):
    __tablename__ = "farm_breeding_settings"

    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    default_gestation: Mapped[int] = mapped_column(
        Integer, nullable=False, default=280, server_default="280"
    )
    days_pregnant_at_dryoff: Mapped[int] = mapped_column(
        Integer, nullable=False, default=220, server_default="220"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
