from __future__ import annotations

from datetime import date
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_event import BreedingEventType
from src.domain.models.breeding_facts import LactationSummary, summarize_lactation


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    animal_id: UUID,
    today: date | None = None,
) -> LactationSummary:
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise NotFound(f"Animal {animal_id} not found")
    last_calving = await uow.breeding_events.last_of_type(
        farm_id, animal_id, BreedingEventType.CALVING.value
    )
    return summarize_lactation(
        animal,
        last_calving.event_date if last_calving else None,
        today=today,
    )
