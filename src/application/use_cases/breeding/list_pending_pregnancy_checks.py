from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.pregnancy_record import PregnancyStatus

DEFAULT_LOOKBACK_DAYS = 90


@dataclass(slots=True)
class PendingPregnancyCheck:
    breeding_record_id: UUID
    animal_id: UUID
    tag: str
    name: str | None
    breeding_date: date
    breeding_method: str
    days_since_breeding: int
    pregnancy_record_id: UUID | None = None
    pregnancy_status: str | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
    today: date | None = None,
) -> list[PendingPregnancyCheck]:
    """Recent breedings whose outcome is still unknown, newest first.

    A breeding is pending while its pregnancy record is missing or still
    suspected; confirmed and closed outcomes are left out.
    """
    if lookback_days <= 0:
        raise ValidationError("lookback_days must be positive")
    today = today or date.today()

    records = await uow.breeding_records.list_by_farm(
        farm_id, since=today - timedelta(days=lookback_days)
    )
    pregnancies = {
        p.breeding_record_id: p for p in await uow.pregnancy_records.list_by_farm(farm_id)
    }

    pending: list[PendingPregnancyCheck] = []
    for record in records:
        pregnancy = pregnancies.get(record.id)
        if pregnancy is not None and pregnancy.pregnancy_status != PregnancyStatus.SUSPECTED.value:
            continue
        animal = await uow.animals.get(farm_id, record.animal_id)
        if animal is None:
            continue
        pending.append(
            PendingPregnancyCheck(
                breeding_record_id=record.id,
                animal_id=animal.id,
                tag=animal.tag,
                name=animal.name,
                breeding_date=record.breeding_date,
                breeding_method=record.breeding_method,
                days_since_breeding=(today - record.breeding_date).days,
                pregnancy_record_id=pregnancy.id if pregnancy else None,
                pregnancy_status=pregnancy.pregnancy_status if pregnancy else None,
            )
        )
    return pending
