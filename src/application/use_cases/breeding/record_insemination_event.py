from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import AppError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding import get_breeding_settings
from src.domain.models.animal import Animal
from src.domain.models.breeding_event import BreedingEventType
from src.domain.models.breeding_facts import expected_calving_date
from src.domain.models.production_transitions import IllegalTransition, resolve_transition

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordInseminationEventInput:
    animal_id: UUID
    insemination_date: date


@dataclass(slots=True)
class RecordInseminationEventOutput:
    success: bool
    status_changed: bool = False
    animal: Animal | None = None
    error: str | None = None


async def apply(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordInseminationEventInput,
) -> RecordInseminationEventOutput:
    """Move the animal to served without committing.

    Write failures propagate so a caller running this inside a savepoint can
    roll it back.
    """
    animal = await uow.animals.get(farm_id, payload.animal_id)
    if not animal:
        raise NotFound(f"Animal {payload.animal_id} not found")
    if animal.sex == "male":
        raise ValidationError("Cannot inseminate a male animal")

    try:
        transition = resolve_transition(
            animal.production_status, BreedingEventType.INSEMINATION.value
        )
    except IllegalTransition as exc:
        raise ValidationError(str(exc)) from exc

    if transition.is_noop:
        logger.info("Animal %s is already served, insemination transition skipped", animal.id)
        return RecordInseminationEventOutput(success=True, status_changed=False, animal=animal)

    settings = await get_breeding_settings.execute(uow, farm_id)
    values = transition.animal_values(
        service_date=payload.insemination_date,
        expected_calving_date=expected_calving_date(
            payload.insemination_date, settings.default_gestation
        ),
    )
    updated = await uow.animals.apply_transition(
        farm_id,
        animal.id,
        from_statuses=[animal.production_status],
        values=values,
    )
    if updated is None:
        # Another writer changed the status between our read and the update
        logger.info("Animal %s changed status concurrently, insemination skipped", animal.id)
        return RecordInseminationEventOutput(success=True, status_changed=False, animal=animal)

    return RecordInseminationEventOutput(success=True, status_changed=True, animal=updated)


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordInseminationEventInput,
    actor_user_id: UUID | None = None,
) -> RecordInseminationEventOutput:
    try:
        result = await apply(uow, farm_id, payload)
        await uow.commit()
    except AppError:
        raise
    except Exception as exc:
        await uow.rollback()
        logger.exception("Failed to apply insemination to animal %s", payload.animal_id)
        return RecordInseminationEventOutput(success=False, error=str(exc))
    return result
