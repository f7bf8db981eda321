from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import NotFound
from src.application.interfaces.repositories.pregnancy_records import PregnancyRecordsRepository
from src.domain.models.pregnancy_record import OPEN_PREGNANCY_STATUSES, PregnancyRecord
from src.infrastructure.db.orm.pregnancy_record import PregnancyRecordORM


class PregnancyRecordsSQLAlchemyRepository(PregnancyRecordsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PregnancyRecordORM) -> PregnancyRecord:
        return PregnancyRecord(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            breeding_record_id=orm.breeding_record_id,
            pregnancy_status=orm.pregnancy_status,
            expected_calving_date=orm.expected_calving_date,
            actual_calving_date=orm.actual_calving_date,
            gestation_length=orm.gestation_length,
            confirmed_date=orm.confirmed_date,
            confirmation_method=orm.confirmation_method,
            veterinarian=orm.veterinarian,
            notes=orm.notes,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, record: PregnancyRecord) -> PregnancyRecord:
        orm = PregnancyRecordORM(
            id=record.id,
            farm_id=record.farm_id,
            animal_id=record.animal_id,
            breeding_record_id=record.breeding_record_id,
            pregnancy_status=record.pregnancy_status,
            expected_calving_date=record.expected_calving_date,
            actual_calving_date=record.actual_calving_date,
            gestation_length=record.gestation_length,
            confirmed_date=record.confirmed_date,
            confirmation_method=record.confirmation_method,
            veterinarian=record.veterinarian,
            notes=record.notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
            version=record.version,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def update(self, record: PregnancyRecord) -> PregnancyRecord:
        orm = await self.session.get(PregnancyRecordORM, record.id)
        if orm is None or orm.farm_id != record.farm_id:
            raise NotFound(f"Pregnancy record {record.id} not found")
        orm.pregnancy_status = record.pregnancy_status
        orm.expected_calving_date = record.expected_calving_date
        orm.actual_calving_date = record.actual_calving_date
        orm.gestation_length = record.gestation_length
        orm.confirmed_date = record.confirmed_date
        orm.confirmation_method = record.confirmation_method
        orm.veterinarian = record.veterinarian
        orm.notes = record.notes
        orm.version = record.version
        await self.session.flush()
        await self.session.refresh(orm)
        return self._to_domain(orm)

    async def get_by_breeding_record(
        self, farm_id: UUID, breeding_record_id: UUID
    ) -> PregnancyRecord | None:
        stmt = (
            select(PregnancyRecordORM)
            .where(PregnancyRecordORM.farm_id == farm_id)
            .where(PregnancyRecordORM.breeding_record_id == breeding_record_id)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_open(self, farm_id: UUID, animal_id: UUID) -> list[PregnancyRecord]:
        stmt = (
            select(PregnancyRecordORM)
            .where(PregnancyRecordORM.farm_id == farm_id)
            .where(PregnancyRecordORM.animal_id == animal_id)
            .where(PregnancyRecordORM.pregnancy_status.in_(OPEN_PREGNANCY_STATUSES))
            .order_by(PregnancyRecordORM.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_by_animal(self, farm_id: UUID, animal_id: UUID) -> list[PregnancyRecord]:
        stmt = (
            select(PregnancyRecordORM)
            .where(PregnancyRecordORM.farm_id == farm_id)
            .where(PregnancyRecordORM.animal_id == animal_id)
            .order_by(PregnancyRecordORM.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_by_farm(
        self, farm_id: UUID, *, statuses: list[str] | None = None
    ) -> list[PregnancyRecord]:
        stmt = select(PregnancyRecordORM).where(PregnancyRecordORM.farm_id == farm_id)
        if statuses:
            stmt = stmt.where(PregnancyRecordORM.pregnancy_status.in_(statuses))
        stmt = stmt.order_by(
            PregnancyRecordORM.expected_calving_date, PregnancyRecordORM.created_at
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
