from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_event import BreedingEvent
from src.domain.models.breeding_record import BreedingRecord
from src.domain.models.pregnancy_record import PregnancyRecord


@dataclass(slots=True)
class BreedingHistory:
    animal_id: UUID
    breeding_records: list[BreedingRecord] = field(default_factory=list)
    events: list[BreedingEvent] = field(default_factory=list)
    pregnancy_records: list[PregnancyRecord] = field(default_factory=list)


async def execute(uow: UnitOfWork, farm_id: UUID, animal_id: UUID) -> BreedingHistory:
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise NotFound(f"Animal {animal_id} not found")

    records = await uow.breeding_records.list_by_animal(farm_id, animal_id)
    events = await uow.breeding_events.list_by_animal(farm_id, animal_id)
    pregnancies = await uow.pregnancy_records.list_by_animal(farm_id, animal_id)

    return BreedingHistory(
        animal_id=animal_id,
        breeding_records=sorted(
            records, key=lambda r: (r.breeding_date, r.created_at), reverse=True
        ),
        events=sorted(events, key=lambda e: (e.event_date, e.created_at), reverse=True),
        pregnancy_records=sorted(pregnancies, key=lambda p: p.created_at, reverse=True),
    )
