"""Unified breeding record creation.

The breeding record insert is the only write that decides success. Its mirror
event, the pregnancy record and the animal's move to served are best-effort:
each runs in its own savepoint and a failure there is logged and dropped
without touching the record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from src.application.errors import AppError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding import (
    get_breeding_settings,
    record_insemination_event,
    write_breeding_event,
)
from src.domain.models.breeding_event import BreedingEvent, BreedingEventType
from src.domain.models.breeding_facts import expected_calving_date
from src.domain.models.breeding_record import (
    BreedingMethod,
    BreedingPregnancyStatus,
    BreedingRecord,
)
from src.domain.models.pregnancy_record import PregnancyRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateBreedingRecordInput:
    animal_id: UUID
    breeding_date: date
    breeding_method: str
    sire_tag: str | None = None
    sire_breed: str | None = None
    technician: str | None = None
    cost: Decimal | None = None
    notes: str | None = None
    pregnancy_status: str = BreedingPregnancyStatus.PENDING.value
    auto_generated: bool = False
    # Existing insemination event the record is synthesized from
    source_event_id: UUID | None = None


@dataclass(slots=True)
class CreateBreedingRecordOutput:
    success: bool
    record: BreedingRecord | None = None
    event: BreedingEvent | None = None
    pregnancy_record: PregnancyRecord | None = None
    status_changed: bool = False
    error: str | None = None


async def _validate(uow: UnitOfWork, farm_id: UUID, payload: CreateBreedingRecordInput) -> None:
    valid_methods = {method.value for method in BreedingMethod}
    if payload.breeding_method not in valid_methods:
        raise ValidationError(
            f"Invalid breeding method. Must be one of: {', '.join(sorted(valid_methods))}"
        )
    valid_statuses = {status.value for status in BreedingPregnancyStatus}
    if payload.pregnancy_status not in valid_statuses:
        raise ValidationError(
            f"Invalid pregnancy status. Must be one of: {', '.join(sorted(valid_statuses))}"
        )
    animal = await uow.animals.get(farm_id, payload.animal_id)
    if not animal:
        raise NotFound(f"Animal {payload.animal_id} not found")
    if animal.sex == "male":
        raise ValidationError("Cannot record breeding for a male animal")


async def _open_pregnancy(
    uow: UnitOfWork, farm_id: UUID, record: BreedingRecord
) -> PregnancyRecord:
    settings = await get_breeding_settings.execute(uow, farm_id)
    superseded = False
    # One open pregnancy per animal, owned by the latest breeding
    for current in await uow.pregnancy_records.list_open(farm_id, record.animal_id):
        owner = await uow.breeding_records.get(farm_id, current.breeding_record_id)
        if owner is not None and owner.breeding_date > record.breeding_date:
            superseded = True
            continue
        logger.info(
            "Closing pregnancy record %s superseded by breeding record %s", current.id, record.id
        )
        current.mark_false(notes=current.notes)
        await uow.pregnancy_records.update(current)

    pregnancy = PregnancyRecord.create(
        farm_id=farm_id,
        animal_id=record.animal_id,
        breeding_record_id=record.id,
        expected_calving_date=expected_calving_date(
            record.breeding_date, settings.default_gestation
        ),
        gestation_length=settings.default_gestation,
    )
    if superseded:
        # Backfilled breeding older than the animal's current pregnancy
        logger.info(
            "Breeding record %s predates an open pregnancy, storing its pregnancy closed",
            record.id,
        )
        pregnancy.mark_false()
    return await uow.pregnancy_records.add(pregnancy)


async def apply(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: CreateBreedingRecordInput,
    actor_user_id: UUID | None = None,
) -> CreateBreedingRecordOutput:
    """Run every step without committing; a primary-write failure propagates."""
    await _validate(uow, farm_id, payload)

    record = BreedingRecord.create(
        farm_id=farm_id,
        animal_id=payload.animal_id,
        breeding_date=payload.breeding_date,
        breeding_method=payload.breeding_method,
        sire_tag=payload.sire_tag,
        sire_breed=payload.sire_breed,
        technician=payload.technician,
        cost=payload.cost,
        notes=payload.notes,
        pregnancy_status=payload.pregnancy_status,
        auto_generated=payload.auto_generated,
        breeding_event_id=payload.source_event_id,
        created_by=actor_user_id,
    )
    record = await uow.breeding_records.add(record)
    result = CreateBreedingRecordOutput(success=True, record=record)
    mirrored = payload.source_event_id is not None

    if not mirrored:
        try:
            async with uow.savepoint():
                result.event = await write_breeding_event.execute(
                    uow,
                    farm_id,
                    write_breeding_event.WriteBreedingEventInput(
                        animal_id=record.animal_id,
                        event_type=BreedingEventType.INSEMINATION.value,
                        event_date=record.breeding_date,
                        attributes={
                            "insemination_method": record.breeding_method,
                            "semen_bull_code": record.sire_tag,
                            "technician_name": record.technician,
                        },
                        notes=record.notes,
                    ),
                    actor_user_id,
                )
        except Exception:
            logger.exception("Failed to append insemination event for breeding record %s", record.id)

    try:
        async with uow.savepoint():
            result.pregnancy_record = await _open_pregnancy(uow, farm_id, record)
    except Exception:
        logger.exception("Failed to create pregnancy record for breeding record %s", record.id)

    if not mirrored:
        try:
            async with uow.savepoint():
                transition = await record_insemination_event.apply(
                    uow,
                    farm_id,
                    record_insemination_event.RecordInseminationEventInput(
                        animal_id=record.animal_id,
                        insemination_date=record.breeding_date,
                    ),
                )
            result.status_changed = transition.status_changed
        except AppError as exc:
            logger.warning("Animal %s not moved to served: %s", record.animal_id, exc.message)
        except Exception:
            logger.exception("Failed to mark animal %s as served", record.animal_id)

    return result


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: CreateBreedingRecordInput,
    actor_user_id: UUID | None = None,
) -> CreateBreedingRecordOutput:
    try:
        result = await apply(uow, farm_id, payload, actor_user_id)
        await uow.commit()
    except AppError:
        raise
    except Exception as exc:
        await uow.rollback()
        logger.exception("Failed to create breeding record for animal %s", payload.animal_id)
        return CreateBreedingRecordOutput(success=False, error=str(exc))
    return result
