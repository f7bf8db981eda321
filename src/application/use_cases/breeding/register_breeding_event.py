from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from src.application.errors import AppError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding import record_insemination_event, write_breeding_event
from src.domain.models.breeding_event import BreedingEvent, BreedingEventType

logger = logging.getLogger(__name__)

# Pregnancy checks and calvings carry state changes and have their own handlers
DIRECT_EVENT_TYPES = frozenset(
    {BreedingEventType.HEAT_DETECTION.value, BreedingEventType.INSEMINATION.value}
)


@dataclass(slots=True)
class RegisterBreedingEventOutput:
    success: bool
    event: BreedingEvent | None = None
    status_changed: bool = False
    error: str | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: write_breeding_event.WriteBreedingEventInput,
    actor_user_id: UUID | None = None,
) -> RegisterBreedingEventOutput:
    """Direct timeline entry.

    An insemination entry also moves the animal to served, best-effort.
    """
    if payload.event_type not in DIRECT_EVENT_TYPES:
        raise ValidationError(
            f"Event type '{payload.event_type}' must be recorded through its own endpoint"
        )
    animal = await uow.animals.get(farm_id, payload.animal_id)
    if not animal:
        raise NotFound(f"Animal {payload.animal_id} not found")

    try:
        event = await write_breeding_event.execute(uow, farm_id, payload, actor_user_id)
    except AppError:
        raise
    except Exception as exc:
        await uow.rollback()
        logger.exception("Failed to write %s event for animal %s", payload.event_type, animal.id)
        return RegisterBreedingEventOutput(success=False, error=str(exc))

    status_changed = False
    if event.event_type == BreedingEventType.INSEMINATION.value:
        try:
            async with uow.savepoint():
                transition = await record_insemination_event.apply(
                    uow,
                    farm_id,
                    record_insemination_event.RecordInseminationEventInput(
                        animal_id=animal.id,
                        insemination_date=event.event_date,
                    ),
                )
            status_changed = transition.status_changed
        except AppError as exc:
            logger.warning("Animal %s not moved to served: %s", animal.id, exc.message)
        except Exception:
            logger.exception("Failed to mark animal %s as served", animal.id)

    try:
        await uow.commit()
    except Exception as exc:
        await uow.rollback()
        logger.exception("Failed to commit %s event for animal %s", payload.event_type, animal.id)
        return RegisterBreedingEventOutput(success=False, error=str(exc))

    return RegisterBreedingEventOutput(success=True, event=event, status_changed=status_changed)
