from __future__ import annotations

from datetime import date
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding import get_breeding_settings
from src.domain.models.breeding_facts import DryOffStatus, compute_dry_off_status


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    animal_id: UUID,
    today: date | None = None,
) -> DryOffStatus:
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise NotFound(f"Animal {animal_id} not found")
    settings = await get_breeding_settings.execute(uow, farm_id)
    return compute_dry_off_status(
        animal,
        threshold_days=settings.days_pregnant_at_dryoff,
        gestation_days=settings.default_gestation,
        today=today,
    )
