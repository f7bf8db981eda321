from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.breeding_settings import FarmBreedingSettings


class BreedingSettingsRepository(Protocol):
    async def get(self, farm_id: UUID) -> FarmBreedingSettings | None: ...

    async def upsert(self, settings: FarmBreedingSettings) -> FarmBreedingSettings: ...
