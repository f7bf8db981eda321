from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding import create_breeding_record
from src.domain.models.breeding_event import BreedingEvent, BreedingEventType
from src.domain.models.breeding_record import BreedingMethod, BreedingPregnancyStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconcileBreedingRecordsOutput:
    success: bool
    synced_count: int = 0
    errors: list[str] = field(default_factory=list)


def _record_input(event: BreedingEvent) -> create_breeding_record.CreateBreedingRecordInput:
    return create_breeding_record.CreateBreedingRecordInput(
        animal_id=event.animal_id,
        breeding_date=event.event_date,
        breeding_method=event.attribute("insemination_method") or BreedingMethod.AI.value,
        sire_tag=event.attribute("semen_bull_code"),
        technician=event.attribute("technician_name"),
        notes=event.notes,
        pregnancy_status=BreedingPregnancyStatus.PENDING.value,
        auto_generated=True,
        source_event_id=event.id,
    )


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    actor_user_id: UUID | None = None,
) -> ReconcileBreedingRecordsOutput:
    """Create breeding records for insemination events that have none.

    Each event is handled in its own savepoint, so one bad event is reported in
    `errors` without undoing the others.
    """
    try:
        events = await uow.breeding_events.list_by_farm(
            farm_id, event_type=BreedingEventType.INSEMINATION.value
        )
    except Exception as exc:
        logger.exception("Failed to list insemination events for farm %s", farm_id)
        return ReconcileBreedingRecordsOutput(success=False, errors=[str(exc)])

    synced = 0
    errors: list[str] = []
    for event in events:
        try:
            async with uow.savepoint():
                existing = await uow.breeding_records.find_by_animal_and_date(
                    farm_id, event.animal_id, event.event_date
                )
                if existing:
                    continue
                await create_breeding_record.apply(
                    uow, farm_id, _record_input(event), actor_user_id
                )
        except Exception as exc:
            logger.warning("Failed to sync event %s: %s", event.id, exc)
            errors.append(f"Failed to sync event {event.id}: {exc}")
            continue
        synced += 1

    try:
        await uow.commit()
    except Exception as exc:
        await uow.rollback()
        logger.exception("Failed to commit reconciliation for farm %s", farm_id)
        return ReconcileBreedingRecordsOutput(success=False, errors=errors + [str(exc)])

    logger.info(
        "Reconciled farm %s: %d breeding records created, %d errors",
        farm_id,
        synced,
        len(errors),
    )
    return ReconcileBreedingRecordsOutput(success=True, synced_count=synced, errors=errors)
