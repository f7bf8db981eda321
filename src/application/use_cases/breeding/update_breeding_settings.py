from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding import get_breeding_settings
from src.domain.models.breeding_settings import FarmBreedingSettings

MIN_GESTATION_DAYS = 260
MAX_GESTATION_DAYS = 300


@dataclass(slots=True)
class UpdateBreedingSettingsInput:
    default_gestation: int | None = None
    days_pregnant_at_dryoff: int | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: UpdateBreedingSettingsInput,
    actor_user_id: UUID | None = None,
) -> FarmBreedingSettings:
    current = await get_breeding_settings.execute(uow, farm_id)
    gestation = (
        payload.default_gestation
        if payload.default_gestation is not None
        else current.default_gestation
    )
    dryoff = (
        payload.days_pregnant_at_dryoff
        if payload.days_pregnant_at_dryoff is not None
        else current.days_pregnant_at_dryoff
    )

    if not MIN_GESTATION_DAYS <= gestation <= MAX_GESTATION_DAYS:
        raise ValidationError(
            f"Default gestation must be between {MIN_GESTATION_DAYS} and "
            f"{MAX_GESTATION_DAYS} days"
        )
    if not 0 < dryoff < gestation:
        raise ValidationError("Days pregnant at dry-off must be positive and below gestation")

    saved = await uow.breeding_settings.upsert(
        FarmBreedingSettings(
            farm_id=farm_id,
            default_gestation=gestation,
            days_pregnant_at_dryoff=dryoff,
        )
    )
    await uow.commit()
    return saved
