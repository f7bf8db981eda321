from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.production_status import ProductionStatus


@dataclass(slots=True)
class Animal:
    id: UUID
    farm_id: UUID
    tag: str
    name: str | None = None
    sex: str | None = None
    birth_date: date | None = None
    birth_weight: Decimal | None = None
    status: str = AnimalStatus.ACTIVE.value
    source: str | None = None
    dam_id: UUID | None = None
    notes: str | None = None

    # Breeding / production fields
    production_status: str | None = None
    service_date: date | None = None
    expected_calving_date: date | None = None
    days_in_milk: int | None = None
    lactation_number: int = 0
    current_daily_production: Decimal | None = None

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        tag: str,
        name: str | None = None,
        sex: str | None = None,
        birth_date: date | None = None,
        birth_weight: Decimal | None = None,
        status: str = AnimalStatus.ACTIVE.value,
        source: str | None = None,
        dam_id: UUID | None = None,
        notes: str | None = None,
        production_status: str | None = None,
        lactation_number: int = 0,
    ) -> Animal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            tag=tag,
            name=name,
            sex=sex,
            birth_date=birth_date,
            birth_weight=birth_weight,
            status=status,
            source=source,
            dam_id=dam_id,
            notes=notes,
            production_status=production_status,
            lactation_number=lactation_number,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_served(self) -> bool:
        return self.production_status == ProductionStatus.SERVED.value

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
