from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_facts import due_status
from src.domain.models.pregnancy_record import PregnancyStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PregnantAnimal:
    pregnancy_record_id: UUID
    animal_id: UUID
    tag: str
    name: str | None
    breeding_record_id: UUID
    conception_date: date | None
    expected_calving_date: date | None
    days_pregnant: int | None
    days_until_due: int | None
    due_status: str


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    due_within_days: int | None = None,
    today: date | None = None,
) -> list[PregnantAnimal]:
    """Confirmed, not yet calved pregnancies on the farm, soonest calving first.

    With `due_within_days` only animals expected to calve within that many days
    (overdue ones included) are returned.
    """
    today = today or date.today()
    pregnancies = await uow.pregnancy_records.list_by_farm(
        farm_id, statuses=[PregnancyStatus.CONFIRMED.value]
    )

    items: list[PregnantAnimal] = []
    for pregnancy in pregnancies:
        if pregnancy.actual_calving_date is not None:
            continue
        animal = await uow.animals.get(farm_id, pregnancy.animal_id)
        if animal is None:
            logger.info(
                "Skipping pregnancy record %s of missing animal %s",
                pregnancy.id,
                pregnancy.animal_id,
            )
            continue
        record = await uow.breeding_records.get(farm_id, pregnancy.breeding_record_id)
        conception = record.breeding_date if record else None
        expected = pregnancy.expected_calving_date
        days_until_due = (expected - today).days if expected else None
        if due_within_days is not None and (
            days_until_due is None or days_until_due > due_within_days
        ):
            continue
        items.append(
            PregnantAnimal(
                pregnancy_record_id=pregnancy.id,
                animal_id=animal.id,
                tag=animal.tag,
                name=animal.name,
                breeding_record_id=pregnancy.breeding_record_id,
                conception_date=conception,
                expected_calving_date=expected,
                days_pregnant=(today - conception).days if conception else None,
                days_until_due=days_until_due,
                due_status=due_status(days_until_due),
            )
        )

    items.sort(key=lambda item: (item.expected_calving_date is None, item.expected_calving_date))
    return items
