from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.breeding_records import BreedingRecordsRepository
from src.domain.models.breeding_record import BreedingRecord
from src.infrastructure.db.orm.breeding_record import BreedingRecordORM


class BreedingRecordsSQLAlchemyRepository(BreedingRecordsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedingRecordORM) -> BreedingRecord:
        return BreedingRecord(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            breeding_date=orm.breeding_date,
            breeding_method=orm.breeding_method,
            sire_tag=orm.sire_tag,
            sire_breed=orm.sire_breed,
            technician=orm.technician,
            cost=orm.cost,
            notes=orm.notes,
            pregnancy_status=orm.pregnancy_status,
            auto_generated=orm.auto_generated,
            breeding_event_id=orm.breeding_event_id,
            created_by=orm.created_by,
            created_at=orm.created_at,
        )

    def _to_orm(self, record: BreedingRecord) -> BreedingRecordORM:
        return BreedingRecordORM(
            id=record.id,
            farm_id=record.farm_id,
            animal_id=record.animal_id,
            breeding_date=record.breeding_date,
            breeding_method=record.breeding_method,
            sire_tag=record.sire_tag,
            sire_breed=record.sire_breed,
            technician=record.technician,
            cost=record.cost,
            notes=record.notes,
            pregnancy_status=record.pregnancy_status,
            auto_generated=record.auto_generated,
            breeding_event_id=record.breeding_event_id,
            created_by=record.created_by,
            created_at=record.created_at,
        )

    async def add(self, record: BreedingRecord) -> BreedingRecord:
        orm = self._to_orm(record)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, record_id: UUID) -> BreedingRecord | None:
        stmt = (
            select(BreedingRecordORM)
            .where(BreedingRecordORM.farm_id == farm_id)
            .where(BreedingRecordORM.id == record_id)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def find_by_animal_and_date(
        self, farm_id: UUID, animal_id: UUID, breeding_date: date
    ) -> BreedingRecord | None:
        stmt = (
            select(BreedingRecordORM)
            .where(BreedingRecordORM.farm_id == farm_id)
            .where(BreedingRecordORM.animal_id == animal_id)
            .where(BreedingRecordORM.breeding_date == breeding_date)
            .order_by(BreedingRecordORM.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalars().first()
        return self._to_domain(orm) if orm else None

    async def list_by_animal(self, farm_id: UUID, animal_id: UUID) -> list[BreedingRecord]:
        stmt = (
            select(BreedingRecordORM)
            .where(BreedingRecordORM.farm_id == farm_id)
            .where(BreedingRecordORM.animal_id == animal_id)
            .order_by(BreedingRecordORM.breeding_date.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_by_farm(
        self, farm_id: UUID, *, since: date | None = None
    ) -> list[BreedingRecord]:
        stmt = select(BreedingRecordORM).where(BreedingRecordORM.farm_id == farm_id)
        if since is not None:
            stmt = stmt.where(BreedingRecordORM.breeding_date >= since)
        stmt = stmt.order_by(
            BreedingRecordORM.breeding_date.desc(), BreedingRecordORM.created_at.desc()
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
