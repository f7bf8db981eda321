from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.pregnancy_record import PregnancyRecord


class PregnancyRecordsRepository(Protocol):
    async def add(self, record: PregnancyRecord) -> PregnancyRecord: ...

    async def update(self, record: PregnancyRecord) -> PregnancyRecord: ...

    async def get_by_breeding_record(
        self, farm_id: UUID, breeding_record_id: UUID
    ) -> PregnancyRecord | None: ...

    async def list_open(self, farm_id: UUID, animal_id: UUID) -> list[PregnancyRecord]:
        """Open (suspected/confirmed) records for an animal, newest first."""
        ...

    async def list_by_animal(self, farm_id: UUID, animal_id: UUID) -> list[PregnancyRecord]: ...

    async def list_by_farm(
        self, farm_id: UUID, *, statuses: list[str] | None = None
    ) -> list[PregnancyRecord]: ...
