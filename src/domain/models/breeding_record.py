from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4


class BreedingMethod(str, Enum):
    NATURAL = "natural_breeding"
    AI = "artificial_insemination"


class BreedingPregnancyStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    NEGATIVE = "negative"
    ABORTED = "aborted"
    COMPLETED = "completed"


@dataclass(slots=True)
class BreedingRecord:
    """Authoritative record of a breeding act.

    Created once and never updated by the engine; how the pregnancy turns out is
    tracked on the paired PregnancyRecord.
    """

    id: UUID
    farm_id: UUID
    animal_id: UUID
    breeding_date: date
    breeding_method: str

    sire_tag: str | None = None
    sire_breed: str | None = None
    technician: str | None = None
    cost: Decimal | None = None
    notes: str | None = None
    pregnancy_status: str = BreedingPregnancyStatus.PENDING.value
    auto_generated: bool = False
    breeding_event_id: UUID | None = None
    created_by: UUID | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        breeding_date: date,
        breeding_method: str,
        sire_tag: str | None = None,
        sire_breed: str | None = None,
        technician: str | None = None,
        cost: Decimal | None = None,
        notes: str | None = None,
        pregnancy_status: str = BreedingPregnancyStatus.PENDING.value,
        auto_generated: bool = False,
        breeding_event_id: UUID | None = None,
        created_by: UUID | None = None,
    ) -> BreedingRecord:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            breeding_date=breeding_date,
            breeding_method=breeding_method,
            sire_tag=sire_tag,
            sire_breed=sire_breed,
            technician=technician,
            cost=cost,
            notes=notes,
            pregnancy_status=pregnancy_status,
            auto_generated=auto_generated,
            breeding_event_id=breeding_event_id,
            created_by=created_by,
            created_at=datetime.now(timezone.utc),
        )
