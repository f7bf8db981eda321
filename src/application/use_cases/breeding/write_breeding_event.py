from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_event import (
    EVENT_ATTRIBUTES,
    BreedingEvent,
    CalvingOutcome,
    PregnancyResult,
)
from src.domain.models.breeding_record import BreedingMethod

# Attributes restricted to a fixed set of values
_ENUMERATED: dict[str, type[Enum]] = {
    "insemination_method": BreedingMethod,
    "pregnancy_result": PregnancyResult,
    "calving_outcome": CalvingOutcome,
}


@dataclass(slots=True)
class WriteBreedingEventInput:
    animal_id: UUID
    event_type: str
    event_date: date
    attributes: dict | None = None
    notes: str | None = None


def build_event_data(event_type: str, attributes: dict | None) -> dict | None:
    allowed = EVENT_ATTRIBUTES.get(event_type)
    if allowed is None:
        valid_types = ", ".join(sorted(EVENT_ATTRIBUTES))
        raise ValidationError(f"Invalid event type. Must be one of: {valid_types}")
    if not attributes:
        return None

    unknown = set(attributes) - allowed
    if unknown:
        raise ValidationError(
            f"Attributes not allowed for {event_type} events: {', '.join(sorted(unknown))}"
        )

    data: dict = {}
    for key, value in attributes.items():
        if value is None:
            continue
        enum_cls = _ENUMERATED.get(key)
        if enum_cls is not None:
            valid_values = {member.value for member in enum_cls}
            if value not in valid_values:
                raise ValidationError(
                    f"Invalid {key}. Must be one of: {', '.join(sorted(valid_values))}"
                )
        # Keep data JSON-serializable
        if isinstance(value, date):
            value = value.isoformat()
        elif isinstance(value, Decimal):
            value = str(value)
        data[key] = value
    return data or None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: WriteBreedingEventInput,
    actor_user_id: UUID | None = None,
) -> BreedingEvent:
    """Append a timeline entry. Does not commit; the caller owns the transaction."""
    event = BreedingEvent.create(
        farm_id=farm_id,
        animal_id=payload.animal_id,
        event_type=payload.event_type,
        event_date=payload.event_date,
        data=build_event_data(payload.event_type, payload.attributes),
        notes=payload.notes,
        created_by=actor_user_id,
    )
    return await uow.breeding_events.add(event)
