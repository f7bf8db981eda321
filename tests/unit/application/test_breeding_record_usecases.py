from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from src.application.errors import NotFound, ValidationError
from src.application.use_cases.breeding import (
    create_breeding_record,
    reconcile_breeding_records,
    record_pregnancy_check,
    write_breeding_event,
)


def _record_input(animal_id, **overrides):
    fields = {
        "animal_id": animal_id,
        "breeding_date": date(2024, 1, 1),
        "breeding_method": "artificial_insemination",
        "sire_tag": "HOL-778",
        "technician": "Ana",
        "cost": Decimal("35.00"),
    }
    fields.update(overrides)
    return create_breeding_record.CreateBreedingRecordInput(**fields)


@pytest.mark.asyncio
async def test_create_breeding_record_syncs_all_stores(uow, farm_id):
    animal = uow.seed_animal(farm_id, production_status="heifer")
    actor = uuid4()

    result = await create_breeding_record.execute(
        uow, farm_id, _record_input(animal.id), actor_user_id=actor
    )

    assert result.success is True
    assert result.record.pregnancy_status == "pending"
    assert result.record.created_by == actor
    assert result.record.auto_generated is False

    assert result.event.event_type == "insemination"
    assert result.event.data == {
        "insemination_method": "artificial_insemination",
        "semen_bull_code": "HOL-778",
        "technician_name": "Ana",
    }

    pregnancy = result.pregnancy_record
    assert pregnancy.pregnancy_status == "suspected"
    assert pregnancy.breeding_record_id == result.record.id
    assert pregnancy.expected_calving_date == date(2024, 10, 7)
    assert pregnancy.gestation_length == 280

    assert result.status_changed is True
    assert uow.animals.rows[animal.id].production_status == "served"
    assert uow.commits == 1


@pytest.mark.asyncio
async def test_timeline_failure_does_not_lose_record(uow, farm_id):
    animal = uow.seed_animal(farm_id, production_status="heifer")
    uow.breeding_events.fail_on.add("add")

    result = await create_breeding_record.execute(uow, farm_id, _record_input(animal.id))

    assert result.success is True
    assert result.event is None
    assert result.record.id in uow.breeding_records.rows
    assert len(uow.pregnancy_records.rows) == 1
    assert uow.breeding_events.rows == {}


@pytest.mark.asyncio
async def test_pregnancy_failure_does_not_lose_record(uow, farm_id):
    animal = uow.seed_animal(farm_id, production_status="heifer")
    uow.pregnancy_records.fail_on.add("add")

    result = await create_breeding_record.execute(uow, farm_id, _record_input(animal.id))

    assert result.success is True
    assert result.pregnancy_record is None
    assert result.record.id in uow.breeding_records.rows
    assert len(uow.breeding_events.rows) == 1


@pytest.mark.asyncio
async def test_primary_failure_reports_error(uow, farm_id):
    animal = uow.seed_animal(farm_id, production_status="heifer")
    uow.breeding_records.fail_on.add("add")

    result = await create_breeding_record.execute(uow, farm_id, _record_input(animal.id))

    assert result.success is False
    assert result.record is None
    assert "unavailable" in result.error
    assert uow.rollbacks == 1
    assert uow.breeding_events.rows == {}
    assert uow.pregnancy_records.rows == {}


@pytest.mark.asyncio
async def test_new_breeding_closes_previous_open_pregnancy(uow, farm_id):
    animal = uow.seed_animal(farm_id, production_status="heifer")
    first = await create_breeding_record.execute(uow, farm_id, _record_input(animal.id))
    second = await create_breeding_record.execute(
        uow, farm_id, _record_input(animal.id, breeding_date=date(2024, 1, 22))
    )

    records = {r.breeding_record_id: r for r in uow.pregnancy_records.for_animal(animal.id)}
    assert records[first.record.id].pregnancy_status == "false"
    assert records[second.record.id].pregnancy_status == "suspected"
    open_records = await uow.pregnancy_records.list_open(farm_id, animal.id)
    assert len(open_records) == 1


@pytest.mark.asyncio
async def test_calf_cannot_be_moved_to_served(uow, farm_id):
    calf = uow.seed_animal(farm_id, tag="CALF-9", production_status="calf")

    result = await create_breeding_record.execute(uow, farm_id, _record_input(calf.id))

    assert result.success is True
    assert result.status_changed is False
    assert uow.animals.rows[calf.id].production_status == "calf"


@pytest.mark.asyncio
async def test_create_breeding_record_validation(uow, farm_id):
    animal = uow.seed_animal(farm_id, production_status="heifer")
    bull = uow.seed_animal(farm_id, tag="BULL-2", sex="male", production_status="heifer")

    with pytest.raises(ValidationError):
        await create_breeding_record.execute(
            uow, farm_id, _record_input(animal.id, breeding_method="embryo_transfer")
        )
    with pytest.raises(ValidationError):
        await create_breeding_record.execute(uow, farm_id, _record_input(bull.id))
    with pytest.raises(NotFound):
        await create_breeding_record.execute(uow, farm_id, _record_input(uuid4()))
    with pytest.raises(NotFound):
        await create_breeding_record.execute(uow, uuid4(), _record_input(animal.id))
    assert uow.breeding_records.rows == {}


async def _log_insemination(uow, farm_id, animal_id, when, **attributes):
    event = await write_breeding_event.execute(
        uow,
        farm_id,
        write_breeding_event.WriteBreedingEventInput(
            animal_id=animal_id,
            event_type="insemination",
            event_date=when,
            attributes=attributes or None,
            notes="logged from the parlour",
        ),
    )
    await uow.commit()
    return event


@pytest.mark.asyncio
async def test_reconciliation_creates_missing_records_once(uow, farm_id):
    cow_a = uow.seed_animal(farm_id, tag="A-1", production_status="served")
    cow_b = uow.seed_animal(farm_id, tag="B-1", production_status="served")
    event_a = await _log_insemination(
        uow,
        farm_id,
        cow_a.id,
        date(2024, 3, 1),
        insemination_method="natural_breeding",
        semen_bull_code="BULL-77",
        technician_name="Luis",
    )
    await _log_insemination(uow, farm_id, cow_b.id, date(2024, 3, 2))

    first = await reconcile_breeding_records.execute(uow, farm_id)
    second = await reconcile_breeding_records.execute(uow, farm_id)

    assert first.success is True
    assert first.synced_count == 2
    assert first.errors == []
    assert second.synced_count == 0
    assert len(uow.breeding_records.rows) == 2

    record_a = await uow.breeding_records.find_by_animal_and_date(
        farm_id, cow_a.id, date(2024, 3, 1)
    )
    assert record_a.auto_generated is True
    assert record_a.breeding_method == "natural_breeding"
    assert record_a.sire_tag == "BULL-77"
    assert record_a.technician == "Luis"
    assert record_a.notes == "logged from the parlour"
    assert record_a.breeding_event_id == event_a.id
    assert record_a.pregnancy_status == "pending"

    record_b = await uow.breeding_records.find_by_animal_and_date(
        farm_id, cow_b.id, date(2024, 3, 2)
    )
    assert record_b.breeding_method == "artificial_insemination"

    # Reconciled records do not duplicate the timeline entry they came from
    assert len(uow.breeding_events.of_type("insemination")) == 2
    assert len(uow.pregnancy_records.rows) == 2


@pytest.mark.asyncio
async def test_reconciliation_skips_events_with_existing_record(uow, farm_id):
    animal = uow.seed_animal(farm_id, production_status="heifer")
    await create_breeding_record.execute(uow, farm_id, _record_input(animal.id))

    result = await reconcile_breeding_records.execute(uow, farm_id)

    assert result.success is True
    assert result.synced_count == 0
    assert len(uow.breeding_records.rows) == 1


@pytest.mark.asyncio
async def test_reconciliation_collects_errors_and_continues(uow, farm_id):
    healthy = uow.seed_animal(farm_id, tag="OK-1", production_status="served")
    orphan_id = uuid4()
    await _log_insemination(uow, farm_id, orphan_id, date(2024, 3, 1))
    await _log_insemination(uow, farm_id, healthy.id, date(2024, 3, 5))

    result = await reconcile_breeding_records.execute(uow, farm_id)

    assert result.success is True
    assert result.synced_count == 1
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Failed to sync event ")
    assert f"Animal {orphan_id} not found" in result.errors[0]


@pytest.mark.asyncio
async def test_backfilled_breeding_keeps_current_pregnancy_open(uow, farm_id):
    animal = uow.seed_animal(farm_id, production_status="heifer")
    await _log_insemination(uow, farm_id, animal.id, date(2023, 1, 1))
    current = await create_breeding_record.execute(
        uow, farm_id, _record_input(animal.id, breeding_date=date(2024, 3, 1))
    )
    await record_pregnancy_check.execute(
        uow,
        farm_id,
        record_pregnancy_check.RecordPregnancyCheckInput(
            animal_id=animal.id,
            check_date=date(2024, 4, 15),
            result="confirmed",
            breeding_record_id=current.record.id,
        ),
    )

    result = await reconcile_breeding_records.execute(uow, farm_id)

    assert result.synced_count == 1
    open_records = await uow.pregnancy_records.list_open(farm_id, animal.id)
    assert [(r.breeding_record_id, r.pregnancy_status) for r in open_records] == [
        (current.record.id, "confirmed")
    ]
    backfilled = await uow.breeding_records.find_by_animal_and_date(
        farm_id, animal.id, date(2023, 1, 1)
    )
    old_pregnancy = await uow.pregnancy_records.get_by_breeding_record(farm_id, backfilled.id)
    assert old_pregnancy.pregnancy_status == "false"


@pytest.mark.asyncio
async def test_backdated_breeding_does_not_close_newer_pregnancy(uow, farm_id):
    animal = uow.seed_animal(farm_id, production_status="heifer")
    newer = await create_breeding_record.execute(
        uow, farm_id, _record_input(animal.id, breeding_date=date(2024, 3, 1))
    )
    older = await create_breeding_record.execute(
        uow, farm_id, _record_input(animal.id, breeding_date=date(2024, 1, 15))
    )

    assert older.success is True
    assert older.pregnancy_record.pregnancy_status == "false"
    open_records = await uow.pregnancy_records.list_open(farm_id, animal.id)
    assert [r.breeding_record_id for r in open_records] == [newer.record.id]
