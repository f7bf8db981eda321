from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_settings import FarmBreedingSettings


async def execute(uow: UnitOfWork, farm_id: UUID) -> FarmBreedingSettings:
    """Farm breeding settings, falling back to defaults when the farm has none."""
    settings = await uow.breeding_settings.get(farm_id)
    if settings is None:
        return FarmBreedingSettings(farm_id=farm_id)
    return settings
