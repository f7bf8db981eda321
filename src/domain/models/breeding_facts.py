from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum

from src.domain.models.animal import Animal
from src.domain.models.breeding_settings import (
    DEFAULT_DAYS_PREGNANT_AT_DRYOFF,
    DEFAULT_GESTATION_DAYS,
)
from src.domain.value_objects.production_status import ProductionStatus


@dataclass(slots=True)
class DryOffStatus:
    should_dry_off: bool
    days_until_dry_off: int
    threshold_days: int
    days_pregnant: int | None = None
    expected_calving_date: date | None = None
    days_until_calving: int | None = None
    reason: str | None = None


@dataclass(slots=True)
class LactationSummary:
    days_in_milk: int
    lactation_number: int
    current_daily_production: Decimal | None
    calving_date: date | None


def expected_calving_date(service_date: date, gestation_days: int = DEFAULT_GESTATION_DAYS) -> date:
    return service_date + timedelta(days=gestation_days)


def compute_days_in_milk(
    animal: Animal,
    last_calving_date: date | None,
    today: date | None = None,
) -> int:
    """Days in milk for an animal.

    A non-zero stored value wins; the engine itself only ever stores 0 (at
    calving) or None (when served), so a stored positive number comes from an
    external source such as a herd import. Otherwise lactating animals count
    from their latest calving event.
    """
    if animal.days_in_milk:
        return animal.days_in_milk
    if animal.production_status != ProductionStatus.LACTATING.value:
        return 0
    if last_calving_date is None:
        return 0
    today = today or date.today()
    return max(0, (today - last_calving_date).days)


def compute_dry_off_status(
    animal: Animal,
    threshold_days: int = DEFAULT_DAYS_PREGNANT_AT_DRYOFF,
    gestation_days: int = DEFAULT_GESTATION_DAYS,
    today: date | None = None,
) -> DryOffStatus:
    if animal.production_status != ProductionStatus.SERVED.value or animal.service_date is None:
        return DryOffStatus(
            should_dry_off=False,
            days_until_dry_off=0,
            threshold_days=threshold_days,
            reason="Animal is not in served/pregnant status",
        )

    today = today or date.today()
    days_pregnant = (today - animal.service_date).days
    calving_date = animal.expected_calving_date or expected_calving_date(
        animal.service_date, gestation_days
    )
    should_dry_off = days_pregnant >= threshold_days
    days_until = max(0, threshold_days - days_pregnant)

    if should_dry_off:
        reason = (
            f"Animal has been pregnant for {days_pregnant} days, ready for dry-off "
            f"(threshold: {threshold_days} days)"
        )
    else:
        reason = f"Animal will be ready for dry-off in {days_until} days"

    return DryOffStatus(
        should_dry_off=should_dry_off,
        days_until_dry_off=days_until,
        threshold_days=threshold_days,
        days_pregnant=days_pregnant,
        expected_calving_date=calving_date,
        days_until_calving=max(0, (calving_date - today).days),
        reason=reason,
    )


def summarize_lactation(
    animal: Animal,
    last_calving_date: date | None,
    today: date | None = None,
) -> LactationSummary:
    return LactationSummary(
        days_in_milk=compute_days_in_milk(animal, last_calving_date, today),
        lactation_number=animal.lactation_number or 0,
        current_daily_production=animal.current_daily_production,
        calving_date=last_calving_date,
    )


DUE_SOON_DAYS = 7


class DueStatus(str, Enum):
    NORMAL = "normal"
    DUE_SOON = "due_soon"
    OVERDUE = "overdue"


def due_status(days_until_due: int | None) -> str:
    if days_until_due is None:
        return DueStatus.NORMAL.value
    if days_until_due < 0:
        return DueStatus.OVERDUE.value
    if days_until_due <= DUE_SOON_DAYS:
        return DueStatus.DUE_SOON.value
    return DueStatus.NORMAL.value
