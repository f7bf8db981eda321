from __future__ import annotations

import copy
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from src.application.errors import ConflictError, NotFound
from src.domain.models.animal import Animal
from src.domain.models.breeding_settings import FarmBreedingSettings
from src.domain.models.pregnancy_record import OPEN_PREGNANCY_STATUSES

class InMemoryStore:
    """Dict-backed repository base. Methods listed in `fail_on` raise."""

    def __init__(self) -> None:
        self.rows: dict = {}
        self.fail_on: set[str] = set()

    def _check(self, method: str) -> None:
        if method in self.fail_on:
            raise RuntimeError(f"{type(self).__name__}.{method} unavailable")

class InMemoryAnimals(InMemoryStore):
    async def add(self, animal: Animal) -> Animal:
        self._check("add")
        if any(a.farm_id == animal.farm_id and a.tag == animal.tag for a in self.rows.values()):
            raise ConflictError("Animal tag already exists for farm")
        self.rows[animal.id] = replace(animal)
        return replace(animal)

    async def get(self, farm_id, animal_id):
        animal = self.rows.get(animal_id)
        if animal is None or animal.farm_id != farm_id:
            return None
        return replace(animal)

    async def apply_transition(
        self, farm_id, animal_id, *, from_statuses, values, increment_lactation=False
    ):
        self._check("apply_transition")
        animal = self.rows.get(animal_id)
        if animal is None or animal.farm_id != farm_id:
            return None
        if animal.production_status not in from_statuses:
            return None
        for key, value in values.items():
            setattr(animal, key, value)
        if increment_lactation:
            animal.lactation_number += 1
        animal.version += 1
        return replace(animal)

class InMemoryBreedingRecords(InMemoryStore):
    async def add(self, record):
        self._check("add")
        self.rows[record.id] = replace(record)
        return replace(record)

    async def get(self, farm_id, record_id):
        record = self.rows.get(record_id)
        if record is None or record.farm_id != farm_id:
            return None
        return replace(record)

    async def find_by_animal_and_date(self, farm_id, animal_id, breeding_date):
        for record in self.rows.values():
            if (
                record.farm_id == farm_id
                and record.animal_id == animal_id
                and record.breeding_date == breeding_date
            ):
                return replace(record)
        return None

    async def list_by_animal(self, farm_id, animal_id):
        return [
            replace(r) for r in self.rows.values() if r.farm_id == farm_id and r.animal_id == animal_id
        ]

    async def list_by_farm(self, farm_id, *, since=None):
        records = [
            r
            for r in self.rows.values()
            if r.farm_id == farm_id and (since is None or r.breeding_date >= since)
        ]
        return [replace(r) for r in sorted(records, key=lambda r: r.breeding_date, reverse=True)]


class InMemoryBreedingEvents(InMemoryStore):
    async def add(self, event):
        self._check("add")
        self.rows[event.id] = replace(event)
        return replace(event)

    async def get(self, farm_id, event_id):
        event = self.rows.get(event_id)
        return replace(event) if event and event.farm_id == farm_id else None

    async def list_by_animal(self, farm_id, animal_id):
        return [
            replace(e) for e in self.rows.values() if e.farm_id == farm_id and e.animal_id == animal_id
        ]

    async def list_by_farm(self, farm_id, *, event_type=None):
        events = [
            e
            for e in self.rows.values()
            if e.farm_id == farm_id and (event_type is None or e.event_type == event_type)
        ]
        return [replace(e) for e in sorted(events, key=lambda e: e.event_date)]

    async def last_of_type(self, farm_id, animal_id, event_type):
        matches = [
            e
            for e in self.rows.values()
            if e.farm_id == farm_id and e.animal_id == animal_id and e.event_type == event_type
        ]
        if not matches:
            return None
        return replace(max(matches, key=lambda e: (e.event_date, e.created_at)))

    def of_type(self, event_type: str) -> list:
        return [e for e in self.rows.values() if e.event_type == event_type]

class InMemoryPregnancyRecords(InMemoryStore):
    async def add(self, record):
        self._check("add")
        self.rows[record.id] = replace(record)
        return replace(record)

    async def update(self, record):
        self._check("update")
        if record.id not in self.rows:
            raise NotFound(f"Pregnancy record {record.id} not found")
        self.rows[record.id] = replace(record)
        return replace(record)

    async def get_by_breeding_record(self, farm_id, breeding_record_id):
        for record in self.rows.values():
            if record.farm_id == farm_id and record.breeding_record_id == breeding_record_id:
                return replace(record)
        return None

    async def list_open(self, farm_id, animal_id):
        records = [
            r
            for r in self.rows.values()
            if r.farm_id == farm_id
            and r.animal_id == animal_id
            and r.pregnancy_status in OPEN_PREGNANCY_STATUSES
        ]
        return [replace(r) for r in sorted(records, key=lambda r: r.created_at, reverse=True)]

    async def list_by_animal(self, farm_id, animal_id):
        return [
            replace(r) for r in self.rows.values() if r.farm_id == farm_id and r.animal_id == animal_id
        ]

    async def list_by_farm(self, farm_id, *, statuses=None):
        return [
            replace(r)
            for r in self.rows.values()
            if r.farm_id == farm_id and (not statuses or r.pregnancy_status in statuses)
        ]

    def for_animal(self, animal_id: UUID) -> list:
        return [r for r in self.rows.values() if r.animal_id == animal_id]

class InMemoryBreedingSettings(InMemoryStore):
    async def get(self, farm_id):
        settings = self.rows.get(farm_id)
        return replace(settings) if settings else None

    async def upsert(self, settings):
        self.rows[settings.farm_id] = replace(settings)
        return replace(settings)

class InMemoryUnitOfWork:
    """Unit of work whose commit, rollback and savepoints act on snapshots of the stores."""

    def __init__(self) -> None:
        self.animals = InMemoryAnimals()
        self.breeding_records = InMemoryBreedingRecords()
        self.breeding_events = InMemoryBreedingEvents()
        self.pregnancy_records = InMemoryPregnancyRecords()
        self.breeding_settings = InMemoryBreedingSettings()
        self.commits = 0
        self.rollbacks = 0
        self._committed = self._snapshot()

    def _stores(self) -> list[InMemoryStore]:
        return [
            self.animals,
            self.breeding_records,
            self.breeding_events,
            self.pregnancy_records,
            self.breeding_settings,
        ]

    def _snapshot(self) -> list[dict]:
        return [copy.deepcopy(store.rows) for store in self._stores()]

    def _restore(self, snapshot: list[dict]) -> None:
        for store, rows in zip(self._stores(), snapshot):
            store.rows = copy.deepcopy(rows)

    async def commit(self) -> None:
        self.commits += 1
        self._committed = self._snapshot()

    async def rollback(self) -> None:
        self.rollbacks += 1
        self._restore(self._committed)

    @asynccontextmanager
    async def savepoint(self):
        snapshot = self._snapshot()
        try:
            yield
        except Exception:
            self._restore(snapshot)
            raise

    def seed_animal(self, farm_id: UUID, tag: str = "COW-1", **fields) -> Animal:
        animal = Animal.create(farm_id=farm_id, tag=tag, sex=fields.pop("sex", "female"))
        for key, value in fields.items():
            setattr(animal, key, value)
        self.animals.rows[animal.id] = animal
        self._committed = self._snapshot()
        return replace(animal)

    def set_settings(self, farm_id: UUID, gestation: int, dryoff: int) -> None:
        self.breeding_settings.rows[farm_id] = FarmBreedingSettings(
            farm_id=farm_id, default_gestation=gestation, days_pregnant_at_dryoff=dryoff
        )
        self._committed = self._snapshot()

@pytest.fixture()
def uow() -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork()

@pytest.fixture()
def farm_id() -> UUID:
    return uuid4()

@pytest.fixture()
def service_date() -> date:
    return date(2024, 1, 1)
