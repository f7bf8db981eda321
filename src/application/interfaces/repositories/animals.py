from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.animal import Animal


class AnimalRepository(Protocol):
    async def add(self, animal: Animal) -> Animal: ...

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None: ...

    async def apply_transition(
        self,
        farm_id: UUID,
        animal_id: UUID,
        *,
        from_statuses: list[str],
        values: dict,
        increment_lactation: bool = False,
    ) -> Animal | None:
        """Conditionally update breeding fields.

        Applies only while the row's production_status is one of
        `from_statuses`; returns None when no row matched.
        """
        ...
