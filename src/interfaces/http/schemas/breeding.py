from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _lower(value: str) -> str:
    return value.strip().lower()


class BreedingRecordCreate(BaseModel):
    animal_id: UUID
    breeding_date: date
    breeding_method: str  # natural_breeding, artificial_insemination
    sire_tag: str | None = None
    sire_breed: str | None = None
    technician: str | None = None
    cost: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None
    pregnancy_status: str = "pending"

    @field_validator("breeding_method", "pregnancy_status")
    def normalize(cls, v: str) -> str:
        return _lower(v)


class BreedingRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    animal_id: UUID
    breeding_date: date
    breeding_method: str
    sire_tag: str | None
    sire_breed: str | None
    technician: str | None
    cost: Decimal | None
    notes: str | None
    pregnancy_status: str
    auto_generated: bool
    breeding_event_id: UUID | None
    created_by: UUID | None
    created_at: datetime


class BreedingEventCreate(BaseModel):
    animal_id: UUID
    event_type: str
    event_date: date
    attributes: dict[str, Any] | None = None
    notes: str | None = None

    @field_validator("event_type")
    def normalize(cls, v: str) -> str:
        return _lower(v)


class BreedingEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    animal_id: UUID
    event_type: str
    event_date: date
    data: dict[str, Any] | None
    notes: str | None
    created_by: UUID | None
    created_at: datetime


class PregnancyRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    animal_id: UUID
    breeding_record_id: UUID
    pregnancy_status: str
    expected_calving_date: date | None
    actual_calving_date: date | None
    gestation_length: int | None
    confirmed_date: date | None
    confirmation_method: str | None
    veterinarian: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime
    version: int


class AnimalBreedingStateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tag: str
    name: str | None
    sex: str | None
    production_status: str | None
    service_date: date | None
    expected_calving_date: date | None
    days_in_milk: int | None
    lactation_number: int
    dam_id: UUID | None
    version: int


class CreateBreedingRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    record: BreedingRecordResponse
    event: BreedingEventResponse | None = None
    pregnancy_record: PregnancyRecordResponse | None = None
    status_changed: bool = False


class RegisterBreedingEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    event: BreedingEventResponse
    status_changed: bool = False


class InseminationRequest(BaseModel):
    insemination_date: date


class InseminationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    status_changed: bool
    animal: AnimalBreedingStateResponse | None = None


class PregnancyCheckRequest(BaseModel):
    check_date: date
    result: str  # confirmed, negative, pending
    method: str | None = None
    examiner: str | None = None
    notes: str | None = None
    breeding_record_id: UUID | None = None
    expected_calving_date: date | None = None

    @field_validator("result")
    def normalize(cls, v: str) -> str:
        return _lower(v)


class PregnancyCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    status_changed: bool
    pregnancy_record: PregnancyRecordResponse | None = None
    event: BreedingEventResponse | None = None


class CalvingRequest(BaseModel):
    animal_id: UUID
    calving_date: date
    calving_outcome: str = "normal"
    calf_gender: str | None = None
    calf_weight: Decimal | None = Field(default=None, gt=0)
    calf_tag: str | None = None
    calf_name: str | None = None
    calf_breed: str | None = None
    calf_health: str | None = None
    calf_father_info: str | None = None
    notes: str | None = None
    create_calf: bool = False

    @field_validator("calving_outcome")
    def normalize(cls, v: str) -> str:
        return _lower(v)


class CalvingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    calf: AnimalBreedingStateResponse | None = None
    mother: AnimalBreedingStateResponse | None = None
    pregnancy_record: PregnancyRecordResponse | None = None
    event: BreedingEventResponse | None = None


class ReconcileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    synced_count: int
    errors: list[str]


class DryOffStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    should_dry_off: bool
    days_until_dry_off: int
    threshold_days: int
    days_pregnant: int | None = None
    expected_calving_date: date | None = None
    days_until_calving: int | None = None
    reason: str | None = None


class LactationSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    days_in_milk: int
    lactation_number: int
    current_daily_production: Decimal | None
    calving_date: date | None


class BreedingHistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    breeding_records: list[BreedingRecordResponse]
    events: list[BreedingEventResponse]
    pregnancy_records: list[PregnancyRecordResponse]


class BreedingSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    farm_id: UUID
    default_gestation: int
    days_pregnant_at_dryoff: int


class BreedingSettingsUpdate(BaseModel):
    default_gestation: int | None = None
    days_pregnant_at_dryoff: int | None = None


class PregnantAnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    pregnancy_record_id: UUID
    animal_id: UUID
    tag: str
    name: str | None
    breeding_record_id: UUID
    conception_date: date | None
    expected_calving_date: date | None
    days_pregnant: int | None
    days_until_due: int | None
    due_status: str  # normal, due_soon, overdue


class PendingPregnancyCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    breeding_record_id: UUID
    animal_id: UUID
    tag: str
    name: str | None
    breeding_date: date
    breeding_method: str
    days_since_breeding: int
    pregnancy_record_id: UUID | None
    pregnancy_status: str | None
