from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding import get_breeding_settings, write_breeding_event
from src.domain.models.animal import Animal
from src.domain.models.breeding_event import BreedingEvent, BreedingEventType, PregnancyResult
from src.domain.models.breeding_facts import expected_calving_date
from src.domain.models.pregnancy_record import PregnancyRecord
from src.domain.models.production_transitions import (
    IllegalTransition,
    PregnancyCheckOutcome,
    SideEffect,
    resolve_transition,
)

logger = logging.getLogger(__name__)

_RESULT_BY_OUTCOME = {
    PregnancyCheckOutcome.CONFIRMED.value: PregnancyResult.PREGNANT.value,
    PregnancyCheckOutcome.NEGATIVE.value: PregnancyResult.NOT_PREGNANT.value,
    PregnancyCheckOutcome.PENDING.value: PregnancyResult.UNCERTAIN.value,
}


@dataclass(slots=True)
class RecordPregnancyCheckInput:
    animal_id: UUID
    check_date: date
    result: str  # confirmed, negative, pending
    method: str | None = None
    examiner: str | None = None
    notes: str | None = None
    breeding_record_id: UUID | None = None
    expected_calving_date: date | None = None


@dataclass(slots=True)
class RecordPregnancyCheckOutput:
    success: bool
    status_changed: bool = False
    pregnancy_record: PregnancyRecord | None = None
    event: BreedingEvent | None = None
    error: str | None = None


async def _find_pregnancy(
    uow: UnitOfWork, farm_id: UUID, animal: Animal, payload: RecordPregnancyCheckInput
) -> PregnancyRecord | None:
    if payload.breeding_record_id is not None:
        pregnancy = await uow.pregnancy_records.get_by_breeding_record(
            farm_id, payload.breeding_record_id
        )
        if pregnancy is None:
            return None
        if pregnancy.animal_id != animal.id:
            raise ValidationError("Breeding record belongs to a different animal")
        # Closed records stay closed; reopening one would leave two open pregnancies
        if not pregnancy.is_open:
            raise ValidationError(
                f"Pregnancy record {pregnancy.id} is already {pregnancy.pregnancy_status}"
            )
        return pregnancy
    open_records = await uow.pregnancy_records.list_open(farm_id, animal.id)
    return open_records[0] if open_records else None


async def _confirmed_calving_date(
    uow: UnitOfWork,
    farm_id: UUID,
    animal: Animal,
    pregnancy: PregnancyRecord,
    payload: RecordPregnancyCheckInput,
) -> date | None:
    if payload.expected_calving_date is not None:
        return payload.expected_calving_date
    record = await uow.breeding_records.get(farm_id, pregnancy.breeding_record_id)
    service_date = record.breeding_date if record else animal.service_date
    if service_date is None:
        return pregnancy.expected_calving_date
    gestation = pregnancy.gestation_length
    if not gestation:
        gestation = (await get_breeding_settings.execute(uow, farm_id)).default_gestation
    return expected_calving_date(service_date, gestation)


def _event_input(payload: RecordPregnancyCheckInput) -> write_breeding_event.WriteBreedingEventInput:
    return write_breeding_event.WriteBreedingEventInput(
        animal_id=payload.animal_id,
        event_type=BreedingEventType.PREGNANCY_CHECK.value,
        event_date=payload.check_date,
        attributes={
            "pregnancy_result": _RESULT_BY_OUTCOME[payload.result],
            "examination_method": payload.method,
            "veterinarian_name": payload.examiner,
            "estimated_due_date": payload.expected_calving_date,
        },
        notes=payload.notes,
    )


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordPregnancyCheckInput,
    actor_user_id: UUID | None = None,
) -> RecordPregnancyCheckOutput:
    valid_results = {outcome.value for outcome in PregnancyCheckOutcome}
    if payload.result not in valid_results:
        raise ValidationError(
            f"Invalid result. Must be one of: {', '.join(sorted(valid_results))}"
        )

    animal = await uow.animals.get(farm_id, payload.animal_id)
    if not animal:
        raise NotFound(f"Animal {payload.animal_id} not found")

    try:
        transition = resolve_transition(
            animal.production_status, BreedingEventType.PREGNANCY_CHECK.value, payload.result
        )
    except IllegalTransition as exc:
        raise ValidationError(str(exc)) from exc

    if transition.is_noop:
        logger.info(
            "Pregnancy check '%s' on animal %s in status %s changes nothing",
            payload.result,
            animal.id,
            animal.production_status,
        )
        return RecordPregnancyCheckOutput(success=True)

    pregnancy = None
    if transition.has(SideEffect.CONFIRM_PREGNANCY) or transition.has(SideEffect.CLOSE_PREGNANCY):
        pregnancy = await _find_pregnancy(uow, farm_id, animal, payload)
        if pregnancy is None and transition.has(SideEffect.CONFIRM_PREGNANCY):
            raise NotFound(f"No open pregnancy record for animal {animal.id}")

    # A pending check has nothing but the timeline entry, so that entry is primary
    event_is_primary = transition.effects == frozenset({SideEffect.APPEND_EVENT})
    event = None
    status_changed = False

    try:
        if transition.has(SideEffect.CONFIRM_PREGNANCY):
            calving_date = await _confirmed_calving_date(uow, farm_id, animal, pregnancy, payload)
            pregnancy.confirm(
                confirmed_date=payload.check_date,
                expected_calving_date=calving_date,
                method=payload.method,
                veterinarian=payload.examiner,
                notes=payload.notes,
            )
            pregnancy = await uow.pregnancy_records.update(pregnancy)

        if transition.changes_status:
            updated = await uow.animals.apply_transition(
                farm_id,
                animal.id,
                from_statuses=[animal.production_status],
                values=transition.animal_values(),
            )
            if updated is None:
                logger.info(
                    "Animal %s changed status concurrently, pregnancy check skipped", animal.id
                )
                return RecordPregnancyCheckOutput(success=True)
            status_changed = True

        if event_is_primary:
            event = await write_breeding_event.execute(
                uow, farm_id, _event_input(payload), actor_user_id
            )
    except Exception as exc:
        await uow.rollback()
        logger.exception("Failed to record pregnancy check for animal %s", animal.id)
        return RecordPregnancyCheckOutput(success=False, error=str(exc))

    if transition.has(SideEffect.CLOSE_PREGNANCY) and pregnancy is not None:
        try:
            async with uow.savepoint():
                pregnancy.mark_false(payload.check_date, payload.notes)
                pregnancy = await uow.pregnancy_records.update(pregnancy)
        except Exception:
            logger.exception("Failed to close pregnancy record %s", pregnancy.id)

    if transition.has(SideEffect.APPEND_EVENT) and not event_is_primary:
        try:
            async with uow.savepoint():
                event = await write_breeding_event.execute(
                    uow, farm_id, _event_input(payload), actor_user_id
                )
        except Exception:
            logger.exception("Failed to append pregnancy check event for animal %s", animal.id)

    try:
        await uow.commit()
    except Exception as exc:
        await uow.rollback()
        logger.exception("Failed to commit pregnancy check for animal %s", animal.id)
        return RecordPregnancyCheckOutput(success=False, error=str(exc))

    return RecordPregnancyCheckOutput(
        success=True,
        status_changed=status_changed,
        pregnancy_record=pregnancy,
        event=event,
    )
