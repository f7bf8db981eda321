from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.breeding_record import BreedingRecord


class BreedingRecordsRepository(Protocol):
    async def add(self, record: BreedingRecord) -> BreedingRecord: ...

    async def get(self, farm_id: UUID, record_id: UUID) -> BreedingRecord | None: ...

    async def find_by_animal_and_date(
        self, farm_id: UUID, animal_id: UUID, breeding_date: date
    ) -> BreedingRecord | None: ...

    async def list_by_animal(self, farm_id: UUID, animal_id: UUID) -> list[BreedingRecord]: ...

    async def list_by_farm(
        self, farm_id: UUID, *, since: date | None = None
    ) -> list[BreedingRecord]:
        """Farm breeding records, newest breeding first."""
        ...
