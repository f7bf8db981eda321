from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class BreedingEventType(str, Enum):
    HEAT_DETECTION = "heat_detection"
    INSEMINATION = "insemination"
    PREGNANCY_CHECK = "pregnancy_check"
    CALVING = "calving"


class PregnancyResult(str, Enum):
    PREGNANT = "pregnant"
    NOT_PREGNANT = "not_pregnant"
    UNCERTAIN = "uncertain"


class CalvingOutcome(str, Enum):
    NORMAL = "normal"
    ASSISTED = "assisted"
    DIFFICULT = "difficult"
    CAESAREAN = "caesarean"


# Attributes each event type may carry in `data`
EVENT_ATTRIBUTES: dict[str, frozenset[str]] = {
    BreedingEventType.HEAT_DETECTION.value: frozenset({"heat_signs", "heat_action_taken"}),
    BreedingEventType.INSEMINATION.value: frozenset(
        {"insemination_method", "semen_bull_code", "technician_name"}
    ),
    BreedingEventType.PREGNANCY_CHECK.value: frozenset(
        {"pregnancy_result", "examination_method", "veterinarian_name", "estimated_due_date"}
    ),
    BreedingEventType.CALVING.value: frozenset(
        {
            "calving_outcome",
            "calf_name",
            "calf_breed",
            "calf_gender",
            "calf_weight",
            "calf_tag_number",
            "calf_health_status",
            "calf_father_info",
        }
    ),
}


@dataclass(slots=True)
class BreedingEvent:
    """Append-only timeline entry. There is no update path for these."""

    id: UUID
    farm_id: UUID
    animal_id: UUID
    event_type: str
    event_date: date
    data: dict | None = None
    notes: str | None = None
    created_by: UUID | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        event_type: str,
        event_date: date,
        data: dict | None = None,
        notes: str | None = None,
        created_by: UUID | None = None,
    ) -> BreedingEvent:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            event_type=event_type,
            event_date=event_date,
            data=data,
            notes=notes,
            created_by=created_by,
            created_at=datetime.now(timezone.utc),
        )

    def attribute(self, key: str):
        if not self.data:
            return None
        return self.data.get(key)
