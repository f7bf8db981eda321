from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

DEFAULT_GESTATION_DAYS = 280
DEFAULT_DAYS_PREGNANT_AT_DRYOFF = 220


@dataclass(slots=True)
class FarmBreedingSettings:
    farm_id: UUID
    default_gestation: int = DEFAULT_GESTATION_DAYS
    days_pregnant_at_dryoff: int = DEFAULT_DAYS_PREGNANT_AT_DRYOFF
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
