from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.animals import AnimalRepository
from src.domain.models.animal import Animal
from src.infrastructure.db.orm.animal import AnimalORM


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            farm_id=orm.farm_id,
            tag=orm.tag,
            name=orm.name,
            sex=orm.sex,
            birth_date=orm.birth_date,
            birth_weight=orm.birth_weight,
            status=orm.status,
            source=orm.source,
            dam_id=orm.dam_id,
            notes=orm.notes,
            production_status=orm.production_status,
            service_date=orm.service_date,
            expected_calving_date=orm.expected_calving_date,
            days_in_milk=orm.days_in_milk,
            lactation_number=orm.lactation_number or 0,
            current_daily_production=orm.current_daily_production,
            deleted_at=orm.deleted_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, animal: Animal) -> Animal:
        orm = AnimalORM(
            id=animal.id,
            farm_id=animal.farm_id,
            tag=animal.tag,
            name=animal.name,
            sex=animal.sex,
            birth_date=animal.birth_date,
            birth_weight=animal.birth_weight,
            status=animal.status,
            source=animal.source,
            dam_id=animal.dam_id,
            notes=animal.notes,
            production_status=animal.production_status,
            service_date=animal.service_date,
            expected_calving_date=animal.expected_calving_date,
            days_in_milk=animal.days_in_milk,
            lactation_number=animal.lactation_number,
            current_daily_production=animal.current_daily_production,
            deleted_at=animal.deleted_at,
            created_at=animal.created_at,
            updated_at=animal.updated_at,
            version=animal.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Animal tag already exists for farm") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None:
        stmt = (
            select(AnimalORM)
            .where(AnimalORM.farm_id == farm_id)
            .where(AnimalORM.id == animal_id)
            .where(AnimalORM.deleted_at.is_(None))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def apply_transition(
        self,
        farm_id: UUID,
        animal_id: UUID,
        *,
        from_statuses: list[str],
        values: dict,
        increment_lactation: bool = False,
    ) -> Animal | None:
        # The status guard and the write are one statement, so concurrent
        # writers cannot both apply the same transition
        changes = {**values, "version": AnimalORM.version + 1, "updated_at": func.now()}
        if increment_lactation:
            changes["lactation_number"] = AnimalORM.lactation_number + 1
        stmt = (
            update(AnimalORM)
            .where(AnimalORM.farm_id == farm_id, AnimalORM.id == animal_id)
            .where(AnimalORM.production_status.in_(from_statuses))
            .where(AnimalORM.deleted_at.is_(None))
            .values(**changes)
            .returning(AnimalORM.id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update animal due to constraint violation") from exc
        if result.scalar_one_or_none() is None:
            return None
        return await self.get(farm_id, animal_id)
