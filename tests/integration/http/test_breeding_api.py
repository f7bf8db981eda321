from __future__ import annotations

from datetime import date, timedelta
from uuid import uuid4

BASE = "/api/v1/breeding"


async def test_breeding_lifecycle_flow(client, headers, seed_animal):
    animal_id = await seed_animal("COW-1", production_status="lactating", lactation_number=1)

    create_response = await client.post(
        f"{BASE}/records",
        json={
            "animal_id": str(animal_id),
            "breeding_date": "2024-01-01",
            "breeding_method": "Artificial_Insemination",
            "sire_tag": "HOL-778",
            "cost": "35.00",
        },
        headers=headers,
    )
    assert create_response.status_code == 201
    created = create_response.json()
    record_id = created["record"]["id"]
    assert created["record"]["breeding_method"] == "artificial_insemination"
    assert created["record"]["created_by"] == headers["X-User-ID"]
    assert created["event"]["event_type"] == "insemination"
    assert created["pregnancy_record"]["pregnancy_status"] == "suspected"
    assert created["pregnancy_record"]["expected_calving_date"] == "2024-10-07"
    assert created["status_changed"] is True

    check_response = await client.post(
        f"{BASE}/animals/{animal_id}/pregnancy-checks",
        json={
            "check_date": "2024-02-15",
            "result": "Confirmed",
            "method": "ultrasound",
            "examiner": "Dr. Vega",
            "breeding_record_id": record_id,
        },
        headers=headers,
    )
    assert check_response.status_code == 200
    checked = check_response.json()
    assert checked["status_changed"] is False
    assert checked["pregnancy_record"]["pregnancy_status"] == "confirmed"
    assert checked["pregnancy_record"]["veterinarian"] == "Dr. Vega"
    assert checked["event"]["data"]["pregnancy_result"] == "pregnant"

    dry_off = await client.get(f"{BASE}/animals/{animal_id}/dry-off-status", headers=headers)
    assert dry_off.status_code == 200
    assert dry_off.json()["should_dry_off"] is True
    assert dry_off.json()["threshold_days"] == 220

    calving_response = await client.post(
        f"{BASE}/records/{record_id}/calving",
        json={
            "animal_id": str(animal_id),
            "calving_date": "2024-10-05",
            "calving_outcome": "normal",
            "calf_gender": "Male",
            "calf_weight": "40.5",
            "calf_tag": "CALF-1",
            "create_calf": True,
        },
        headers=headers,
    )
    assert calving_response.status_code == 201
    calving = calving_response.json()
    assert calving["mother"]["production_status"] == "lactating"
    assert calving["mother"]["lactation_number"] == 2
    assert calving["mother"]["service_date"] is None
    assert calving["mother"]["days_in_milk"] == 0
    assert calving["calf"]["tag"] == "CALF-1"
    assert calving["calf"]["sex"] == "male"
    assert calving["calf"]["production_status"] == "calf"
    assert calving["calf"]["dam_id"] == str(animal_id)
    assert calving["pregnancy_record"]["pregnancy_status"] == "completed"
    assert calving["pregnancy_record"]["actual_calving_date"] == "2024-10-05"

    history = await client.get(f"{BASE}/animals/{animal_id}/history", headers=headers)
    assert history.status_code == 200
    body = history.json()
    assert len(body["breeding_records"]) == 1
    assert [e["event_type"] for e in body["events"]] == [
        "calving",
        "pregnancy_check",
        "insemination",
    ]
    assert body["pregnancy_records"][0]["pregnancy_status"] == "completed"

    summary = await client.get(f"{BASE}/animals/{animal_id}/lactation-summary", headers=headers)
    assert summary.status_code == 200
    assert summary.json()["lactation_number"] == 2
    assert summary.json()["calving_date"] == "2024-10-05"
    assert summary.json()["days_in_milk"] > 0


async def test_negative_check_reverts_to_lactating(client, headers, seed_animal):
    animal_id = await seed_animal("COW-2", production_status="lactating")
    await client.post(
        f"{BASE}/records",
        json={
            "animal_id": str(animal_id),
            "breeding_date": "2024-03-01",
            "breeding_method": "natural_breeding",
        },
        headers=headers,
    )

    response = await client.post(
        f"{BASE}/animals/{animal_id}/pregnancy-checks",
        json={"check_date": "2024-04-10", "result": "negative"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["status_changed"] is True
    assert response.json()["pregnancy_record"]["pregnancy_status"] == "false"

    dry_off = await client.get(f"{BASE}/animals/{animal_id}/dry-off-status", headers=headers)
    assert dry_off.json()["should_dry_off"] is False


async def test_insemination_endpoint_is_idempotent(client, headers, seed_animal):
    animal_id = await seed_animal("HEIF-1", production_status="heifer")
    url = f"{BASE}/animals/{animal_id}/insemination"

    first = await client.post(url, json={"insemination_date": "2024-05-01"}, headers=headers)
    second = await client.post(url, json={"insemination_date": "2024-05-01"}, headers=headers)

    assert first.status_code == 200
    assert first.json()["status_changed"] is True
    assert first.json()["animal"]["production_status"] == "served"
    assert first.json()["animal"]["expected_calving_date"] == "2025-02-05"
    assert first.json()["animal"]["version"] == 2
    assert second.json()["status_changed"] is False
    assert second.json()["animal"]["version"] == 2


async def test_reconcile_creates_missing_records_once(client, headers, seed_animal):
    animal_id = await seed_animal("COW-3", production_status="served")
    event_response = await client.post(
        f"{BASE}/events",
        json={
            "animal_id": str(animal_id),
            "event_type": "insemination",
            "event_date": "2024-06-01",
            "attributes": {"semen_bull_code": "JER-12"},
        },
        headers=headers,
    )
    assert event_response.status_code == 201
    assert event_response.json()["status_changed"] is False

    first = await client.post(f"{BASE}/records/reconcile", headers=headers)
    second = await client.post(f"{BASE}/records/reconcile", headers=headers)

    assert first.status_code == 200
    assert first.json() == {"success": True, "synced_count": 1, "errors": []}
    assert second.json()["synced_count"] == 0

    history = (await client.get(f"{BASE}/animals/{animal_id}/history", headers=headers)).json()
    assert len(history["breeding_records"]) == 1
    record = history["breeding_records"][0]
    assert record["auto_generated"] is True
    assert record["sire_tag"] == "JER-12"
    assert record["breeding_event_id"] == event_response.json()["event"]["id"]
    assert len(history["events"]) == 1


async def test_settings_round_trip(client, headers):
    defaults = await client.get(f"{BASE}/settings", headers=headers)
    assert defaults.status_code == 200
    assert defaults.json()["default_gestation"] == 280
    assert defaults.json()["days_pregnant_at_dryoff"] == 220

    updated = await client.put(
        f"{BASE}/settings", json={"default_gestation": 283}, headers=headers
    )
    assert updated.status_code == 200
    assert updated.json()["default_gestation"] == 283

    rejected = await client.put(
        f"{BASE}/settings", json={"default_gestation": 320}, headers=headers
    )
    assert rejected.status_code == 422
    assert rejected.json()["code"] == "validation_error"

    current = await client.get(f"{BASE}/settings", headers=headers)
    assert current.json()["default_gestation"] == 283


async def test_error_responses(client, headers, seed_animal):
    animal_id = await seed_animal("COW-4", production_status="served")

    missing_header = await client.get(f"{BASE}/animals/{animal_id}/history")
    assert missing_header.status_code == 422
    assert missing_header.json()["code"] == "validation_error"

    bad_header = await client.get(
        f"{BASE}/animals/{animal_id}/history", headers={"X-Farm-ID": "not-a-uuid"}
    )
    assert bad_header.status_code == 422

    unknown = await client.get(f"{BASE}/animals/{uuid4()}/history", headers=headers)
    assert unknown.status_code == 404
    assert unknown.json()["code"] == "not_found"

    other_farm = await client.get(
        f"{BASE}/animals/{animal_id}/history", headers={"X-Farm-ID": str(uuid4())}
    )
    assert other_farm.status_code == 404

    bad_method = await client.post(
        f"{BASE}/records",
        json={
            "animal_id": str(animal_id),
            "breeding_date": "2024-01-01",
            "breeding_method": "embryo_transfer",
        },
        headers=headers,
    )
    assert bad_method.status_code == 422

    calving_via_events = await client.post(
        f"{BASE}/events",
        json={"animal_id": str(animal_id), "event_type": "calving", "event_date": "2024-10-01"},
        headers=headers,
    )
    assert calving_via_events.status_code == 422

    unknown_record = await client.post(
        f"{BASE}/records/{uuid4()}/calving",
        json={"animal_id": str(animal_id), "calving_date": "2024-10-01"},
        headers=headers,
    )
    assert unknown_record.status_code == 404


async def test_health(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_malformed_payload_uses_error_envelope(client, headers, seed_animal):
    animal_id = await seed_animal("COW-5", production_status="heifer")

    response = await client.post(
        f"{BASE}/records",
        json={"animal_id": str(animal_id), "breeding_method": "natural_breeding"},
        headers=headers,
    )

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "validation_error"
    assert body["details"]["errors"][0]["loc"] == ["body", "breeding_date"]


async def _create_record(client, headers, animal_id, when):
    response = await client.post(
        f"{BASE}/records",
        json={
            "animal_id": str(animal_id),
            "breeding_date": when.isoformat(),
            "breeding_method": "artificial_insemination",
        },
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["record"]["id"]


async def test_farm_pregnancy_lists(client, headers, seed_animal):
    today = date.today()
    pregnant_id = await seed_animal("PREG-1", production_status="lactating")
    waiting_id = await seed_animal("WAIT-1", production_status="heifer")

    record_id = await _create_record(client, headers, pregnant_id, today - timedelta(days=200))
    await client.post(
        f"{BASE}/animals/{pregnant_id}/pregnancy-checks",
        json={
            "check_date": (today - timedelta(days=160)).isoformat(),
            "result": "confirmed",
            "breeding_record_id": record_id,
        },
        headers=headers,
    )
    await _create_record(client, headers, waiting_id, today - timedelta(days=10))

    pregnant = await client.get(f"{BASE}/pregnant", headers=headers)
    assert pregnant.status_code == 200
    [item] = pregnant.json()
    assert item["animal_id"] == str(pregnant_id)
    assert item["days_pregnant"] == 200
    assert item["days_until_due"] == 80
    assert item["due_status"] == "normal"

    due_soon = await client.get(f"{BASE}/pregnant?due_within_days=30", headers=headers)
    assert due_soon.json() == []

    pending = await client.get(f"{BASE}/pending-checks", headers=headers)
    assert pending.status_code == 200
    [waiting] = pending.json()
    assert waiting["animal_id"] == str(waiting_id)
    assert waiting["days_since_breeding"] == 10
    assert waiting["pregnancy_status"] == "suspected"

    rejected = await client.get(f"{BASE}/pending-checks?lookback_days=0", headers=headers)
    assert rejected.status_code == 422


async def test_closed_pregnancy_cannot_be_confirmed(client, headers, seed_animal):
    animal_id = await seed_animal("COW-6", production_status="heifer")
    first_id = await _create_record(client, headers, animal_id, date(2024, 1, 1))
    await _create_record(client, headers, animal_id, date(2024, 2, 1))

    response = await client.post(
        f"{BASE}/animals/{animal_id}/pregnancy-checks",
        json={"check_date": "2024-03-01", "result": "confirmed", "breeding_record_id": first_id},
        headers=headers,
    )

    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"
