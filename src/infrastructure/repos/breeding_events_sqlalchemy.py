from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.breeding_events import BreedingEventsRepository
from src.domain.models.breeding_event import BreedingEvent
from src.infrastructure.db.orm.breeding_event import BreedingEventORM


class BreedingEventsSQLAlchemyRepository(BreedingEventsRepository):
    """Append-only timeline store; no update or delete."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedingEventORM) -> BreedingEvent:
        return BreedingEvent(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            event_type=orm.event_type,
            event_date=orm.event_date,
            data=orm.data,
            notes=orm.notes,
            created_by=orm.created_by,
            created_at=orm.created_at,
        )

    def _to_orm(self, event: BreedingEvent) -> BreedingEventORM:
        return BreedingEventORM(
            id=event.id,
            farm_id=event.farm_id,
            animal_id=event.animal_id,
            event_type=event.event_type,
            event_date=event.event_date,
            data=event.data,
            notes=event.notes,
            created_by=event.created_by,
            created_at=event.created_at,
        )

    async def add(self, event: BreedingEvent) -> BreedingEvent:
        orm = self._to_orm(event)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, event_id: UUID) -> BreedingEvent | None:
        stmt = (
            select(BreedingEventORM)
            .where(BreedingEventORM.farm_id == farm_id)
            .where(BreedingEventORM.id == event_id)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_by_animal(self, farm_id: UUID, animal_id: UUID) -> list[BreedingEvent]:
        stmt = (
            select(BreedingEventORM)
            .where(BreedingEventORM.farm_id == farm_id)
            .where(BreedingEventORM.animal_id == animal_id)
            .order_by(BreedingEventORM.event_date.desc(), BreedingEventORM.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_by_farm(
        self, farm_id: UUID, *, event_type: str | None = None
    ) -> list[BreedingEvent]:
        stmt = select(BreedingEventORM).where(BreedingEventORM.farm_id == farm_id)
        if event_type is not None:
            stmt = stmt.where(BreedingEventORM.event_type == event_type)
        stmt = stmt.order_by(BreedingEventORM.event_date, BreedingEventORM.created_at)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def last_of_type(
        self, farm_id: UUID, animal_id: UUID, event_type: str
    ) -> BreedingEvent | None:
        stmt = (
            select(BreedingEventORM)
            .where(BreedingEventORM.farm_id == farm_id)
            .where(BreedingEventORM.animal_id == animal_id)
            .where(BreedingEventORM.event_type == event_type)
            .order_by(BreedingEventORM.event_date.desc(), BreedingEventORM.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None
