from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.breeding_settings import BreedingSettingsRepository
from src.domain.models.breeding_settings import FarmBreedingSettings
from src.infrastructure.db.orm.farm_breeding_settings import FarmBreedingSettingsORM


class BreedingSettingsSQLAlchemyRepository(BreedingSettingsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: FarmBreedingSettingsORM) -> FarmBreedingSettings:
        return FarmBreedingSettings(
            farm_id=orm.farm_id,
            default_gestation=orm.default_gestation,
            days_pregnant_at_dryoff=orm.days_pregnant_at_dryoff,
            updated_at=orm.updated_at,
        )

    async def get(self, farm_id: UUID) -> FarmBreedingSettings | None:
        result = await self.session.execute(
            select(FarmBreedingSettingsORM).where(FarmBreedingSettingsORM.farm_id == farm_id)
        )
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def upsert(self, settings: FarmBreedingSettings) -> FarmBreedingSettings:
        orm = await self.session.get(FarmBreedingSettingsORM, settings.farm_id)
        if orm is None:
            orm = FarmBreedingSettingsORM(
                farm_id=settings.farm_id,
                default_gestation=settings.default_gestation,
                days_pregnant_at_dryoff=settings.days_pregnant_at_dryoff,
            )
            self.session.add(orm)
        else:
            orm.default_gestation = settings.default_gestation
            orm.days_pregnant_at_dryoff = settings.days_pregnant_at_dryoff
        await self.session.flush()
        await self.session.refresh(orm)
        return self._to_domain(orm)
