from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding import write_breeding_event
from src.domain.models.animal import Animal
from src.domain.models.breeding_event import BreedingEvent, BreedingEventType, CalvingOutcome
from src.domain.models.pregnancy_record import PregnancyRecord
from src.domain.models.production_transitions import IllegalTransition, resolve_transition
from src.domain.value_objects.animal_status import AnimalSource, AnimalStatus
from src.domain.value_objects.production_status import ProductionStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordCalvingInput:
    animal_id: UUID
    calving_date: date
    calving_outcome: str
    calf_gender: str | None = None
    calf_weight: Decimal | None = None
    calf_tag: str | None = None
    calf_name: str | None = None
    calf_breed: str | None = None
    calf_health: str | None = None
    calf_father_info: str | None = None
    notes: str | None = None
    create_calf: bool = False


@dataclass(slots=True)
class RecordCalvingOutput:
    success: bool
    calf: Animal | None = None
    mother: Animal | None = None
    pregnancy_record: PregnancyRecord | None = None
    event: BreedingEvent | None = None
    error: str | None = None


def _calving_event_input(
    payload: RecordCalvingInput,
) -> write_breeding_event.WriteBreedingEventInput:
    return write_breeding_event.WriteBreedingEventInput(
        animal_id=payload.animal_id,
        event_type=BreedingEventType.CALVING.value,
        event_date=payload.calving_date,
        attributes={
            "calving_outcome": payload.calving_outcome,
            "calf_name": payload.calf_name,
            "calf_breed": payload.calf_breed,
            "calf_gender": payload.calf_gender,
            "calf_weight": payload.calf_weight,
            "calf_tag_number": payload.calf_tag,
            "calf_health_status": payload.calf_health,
            "calf_father_info": payload.calf_father_info,
        },
        notes=payload.notes,
    )


def _build_calf(farm_id: UUID, mother: Animal, payload: RecordCalvingInput) -> Animal:
    return Animal.create(
        farm_id=farm_id,
        tag=payload.calf_tag,
        name=payload.calf_name or f"Calf {payload.calf_tag}",
        sex=(payload.calf_gender or "female").lower(),
        birth_date=payload.calving_date,
        birth_weight=payload.calf_weight,
        status=AnimalStatus.ACTIVE.value,
        source=AnimalSource.BORN.value,
        dam_id=mother.id,
        notes=f"Born from {mother.tag}. Health: {payload.calf_health or 'Good'}",
        production_status=ProductionStatus.CALF.value,
    )


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    breeding_record_id: UUID,
    payload: RecordCalvingInput,
    actor_user_id: UUID | None = None,
) -> RecordCalvingOutput:
    valid_outcomes = {outcome.value for outcome in CalvingOutcome}
    if payload.calving_outcome not in valid_outcomes:
        raise ValidationError(
            f"Invalid calving outcome. Must be one of: {', '.join(sorted(valid_outcomes))}"
        )

    mother = await uow.animals.get(farm_id, payload.animal_id)
    if not mother:
        raise NotFound(f"Animal {payload.animal_id} not found")

    try:
        transition = resolve_transition(mother.production_status, BreedingEventType.CALVING.value)
    except IllegalTransition as exc:
        raise ValidationError(str(exc)) from exc

    record = await uow.breeding_records.get(farm_id, breeding_record_id)
    if not record:
        raise NotFound(f"Breeding record {breeding_record_id} not found")
    if record.animal_id != mother.id:
        raise ValidationError("Breeding record belongs to a different animal")

    pregnancy = await uow.pregnancy_records.get_by_breeding_record(farm_id, breeding_record_id)
    if not pregnancy:
        raise NotFound(f"Pregnancy record for breeding record {breeding_record_id} not found")
    if not pregnancy.is_open:
        raise ValidationError(
            f"Pregnancy record {pregnancy.id} is already {pregnancy.pregnancy_status}"
        )

    # Completing the pregnancy and appending the calving event succeed or fail together
    try:
        pregnancy.complete(payload.calving_date)
        pregnancy = await uow.pregnancy_records.update(pregnancy)
        event = await write_breeding_event.execute(
            uow, farm_id, _calving_event_input(payload), actor_user_id
        )
    except Exception as exc:
        await uow.rollback()
        logger.exception("Failed to record calving for breeding record %s", breeding_record_id)
        return RecordCalvingOutput(success=False, error=str(exc))

    calf = None
    if payload.create_calf and payload.calf_tag:
        try:
            async with uow.savepoint():
                calf = await uow.animals.add(_build_calf(farm_id, mother, payload))
        except Exception:
            calf = None
            logger.exception("Failed to create calf %s for animal %s", payload.calf_tag, mother.id)
    elif payload.create_calf:
        logger.warning("Calf creation requested for animal %s without a calf tag", mother.id)

    refreshed = None
    try:
        async with uow.savepoint():
            refreshed = await uow.animals.apply_transition(
                farm_id,
                mother.id,
                from_statuses=[mother.production_status],
                values=transition.animal_values(),
                increment_lactation=True,
            )
        if refreshed is None:
            logger.warning(
                "Animal %s changed status concurrently, lactation not started", mother.id
            )
    except Exception:
        logger.exception("Failed to start lactation for animal %s", mother.id)

    try:
        await uow.commit()
    except Exception as exc:
        await uow.rollback()
        logger.exception("Failed to commit calving for breeding record %s", breeding_record_id)
        return RecordCalvingOutput(success=False, error=str(exc))

    return RecordCalvingOutput(
        success=True,
        calf=calf,
        mother=refreshed or mother,
        pregnancy_record=pregnancy,
        event=event,
    )
