from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from src.application.interfaces.repositories.animals import AnimalRepository
from src.application.interfaces.repositories.breeding_events import BreedingEventsRepository
from src.application.interfaces.repositories.breeding_records import BreedingRecordsRepository
from src.application.interfaces.repositories.breeding_settings import (
    BreedingSettingsRepository,
)
from src.application.interfaces.repositories.pregnancy_records import (
    PregnancyRecordsRepository,
)


class UnitOfWork(Protocol):
    animals: AnimalRepository
    breeding_records: BreedingRecordsRepository
    breeding_events: BreedingEventsRepository
    pregnancy_records: PregnancyRecordsRepository
    breeding_settings: BreedingSettingsRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    # Nested transaction for best-effort writes; failure inside rolls back only
    # what ran inside the block
    def savepoint(self) -> AbstractAsyncContextManager[None]: ...
