from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class PregnancyStatus(str, Enum):
    SUSPECTED = "suspected"
    CONFIRMED = "confirmed"
    FALSE = "false"
    ABORTED = "aborted"
    COMPLETED = "completed"


OPEN_PREGNANCY_STATUSES = frozenset(
    {PregnancyStatus.SUSPECTED.value, PregnancyStatus.CONFIRMED.value}
)


@dataclass(slots=True)
class PregnancyRecord:
    id: UUID
    farm_id: UUID
    animal_id: UUID
    breeding_record_id: UUID
    pregnancy_status: str = PregnancyStatus.SUSPECTED.value
    expected_calving_date: date | None = None
    actual_calving_date: date | None = None
    gestation_length: int | None = None
    confirmed_date: date | None = None
    confirmation_method: str | None = None
    veterinarian: str | None = None
    notes: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        breeding_record_id: UUID,
        expected_calving_date: date | None = None,
        gestation_length: int | None = None,
    ) -> PregnancyRecord:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            breeding_record_id=breeding_record_id,
            pregnancy_status=PregnancyStatus.SUSPECTED.value,
            expected_calving_date=expected_calving_date,
            gestation_length=gestation_length,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_open(self) -> bool:
        return self.pregnancy_status in OPEN_PREGNANCY_STATUSES

    def confirm(
        self,
        confirmed_date: date,
        expected_calving_date: date | None,
        method: str | None = None,
        veterinarian: str | None = None,
        notes: str | None = None,
    ) -> None:
        self.pregnancy_status = PregnancyStatus.CONFIRMED.value
        self.confirmed_date = confirmed_date
        self.confirmation_method = method
        self.veterinarian = veterinarian
        if notes is not None:
            self.notes = notes
        if expected_calving_date is not None:
            self.expected_calving_date = expected_calving_date
        self.bump_version()

    def mark_false(self, check_date: date | None = None, notes: str | None = None) -> None:
        self.pregnancy_status = PregnancyStatus.FALSE.value
        if check_date is not None:
            self.confirmed_date = check_date
        if notes is not None:
            self.notes = notes
        self.expected_calving_date = None
        self.bump_version()

    def complete(self, actual_calving_date: date) -> None:
        self.pregnancy_status = PregnancyStatus.COMPLETED.value
        self.actual_calving_date = actual_calving_date
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
