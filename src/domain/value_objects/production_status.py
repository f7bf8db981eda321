from __future__ import annotations

from enum import Enum


class ProductionStatus(str, Enum):
    CALF = "calf"
    HEIFER = "heifer"
    SERVED = "served"
    LACTATING = "lactating"
    DRY = "dry"
