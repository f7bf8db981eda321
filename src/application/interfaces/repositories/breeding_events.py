from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.breeding_event import BreedingEvent


class BreedingEventsRepository(Protocol):
    async def add(self, event: BreedingEvent) -> BreedingEvent: ...

    async def get(self, farm_id: UUID, event_id: UUID) -> BreedingEvent | None: ...

    async def list_by_animal(self, farm_id: UUID, animal_id: UUID) -> list[BreedingEvent]: ...

    async def list_by_farm(
        self, farm_id: UUID, *, event_type: str | None = None
    ) -> list[BreedingEvent]: ...

    async def last_of_type(
        self, farm_id: UUID, animal_id: UUID, event_type: str
    ) -> BreedingEvent | None: ...
