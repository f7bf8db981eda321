from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import uuid4

from src.domain.models.animal import Animal
from src.domain.models.breeding_facts import (
    compute_days_in_milk,
    compute_dry_off_status,
    expected_calving_date,
    summarize_lactation,
)


def _animal(**fields) -> Animal:
    animal = Animal.create(farm_id=uuid4(), tag="COW-7", sex="female")
    for key, value in fields.items():
        setattr(animal, key, value)
    return animal


def test_expected_calving_date_uses_gestation():
    assert expected_calving_date(date(2024, 1, 1)) == date(2024, 10, 7)
    assert expected_calving_date(date(2024, 1, 1), 283) == date(2024, 10, 10)


def test_dry_off_due_at_threshold():
    animal = _animal(production_status="served", service_date=date(2024, 1, 1))
    status = compute_dry_off_status(animal, threshold_days=220, today=date(2024, 8, 8))
    assert status.days_pregnant == 220
    assert status.should_dry_off is True
    assert status.days_until_dry_off == 0
    assert status.expected_calving_date == date(2024, 10, 7)
    assert status.days_until_calving == 60


def test_dry_off_one_day_before_threshold():
    animal = _animal(production_status="served", service_date=date(2024, 1, 1))
    status = compute_dry_off_status(animal, threshold_days=220, today=date(2024, 8, 7))
    assert status.days_pregnant == 219
    assert status.should_dry_off is False
    assert status.days_until_dry_off == 1


def test_dry_off_not_applicable_when_not_served():
    animal = _animal(production_status="lactating")
    status = compute_dry_off_status(animal, threshold_days=220, today=date(2024, 8, 8))
    assert status.should_dry_off is False
    assert status.days_until_dry_off == 0
    assert status.threshold_days == 220
    assert status.reason == "Animal is not in served/pregnant status"


def test_days_in_milk_counts_from_last_calving():
    animal = _animal(production_status="lactating", days_in_milk=0)
    assert compute_days_in_milk(animal, date(2024, 3, 1), today=date(2024, 3, 31)) == 30


def test_days_in_milk_prefers_stored_value():
    animal = _animal(production_status="lactating", days_in_milk=45)
    assert compute_days_in_milk(animal, date(2024, 3, 1), today=date(2024, 3, 31)) == 45


def test_days_in_milk_zero_when_not_lactating():
    animal = _animal(production_status="served")
    assert compute_days_in_milk(animal, date(2024, 3, 1), today=date(2024, 3, 31)) == 0


def test_lactation_summary():
    animal = _animal(
        production_status="lactating",
        lactation_number=3,
        current_daily_production=Decimal("28.50"),
    )
    summary = summarize_lactation(animal, date(2024, 3, 1), today=date(2024, 3, 11))
    assert summary.days_in_milk == 10
    assert summary.lactation_number == 3
    assert summary.current_daily_production == Decimal("28.50")
    assert summary.calving_date == date(2024, 3, 1)
