from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.application.errors import WriteFailed
from src.application.use_cases.breeding import (
    create_breeding_record,
    get_breeding_history,
    get_breeding_settings,
    get_dry_off_status,
    get_lactation_summary,
    list_pending_pregnancy_checks,
    list_pregnant_animals,
    reconcile_breeding_records,
    record_calving,
    record_insemination_event,
    record_pregnancy_check,
    register_breeding_event,
    update_breeding_settings,
    write_breeding_event,
)
from src.interfaces.http.deps import FarmContext, get_farm_context, get_uow
from src.interfaces.http.schemas.breeding import (
    BreedingEventCreate,
    BreedingHistoryResponse,
    BreedingRecordCreate,
    BreedingSettingsResponse,
    BreedingSettingsUpdate,
    CalvingRequest,
    CalvingResponse,
    CreateBreedingRecordResponse,
    DryOffStatusResponse,
    InseminationRequest,
    InseminationResponse,
    LactationSummaryResponse,
    PendingPregnancyCheckResponse,
    PregnancyCheckRequest,
    PregnancyCheckResponse,
    PregnantAnimalResponse,
    ReconcileResponse,
    RegisterBreedingEventResponse,
)

router = APIRouter(prefix="/breeding", tags=["breeding"])


def _ensure_success(result, action: str):
    if not result.success:
        raise WriteFailed(f"Failed to {action}", details={"error": result.error})
    return result


@router.post(
    "/records",
    response_model=CreateBreedingRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_breeding_record_endpoint(
    payload: BreedingRecordCreate,
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    result = await create_breeding_record.execute(
        uow,
        context.farm_id,
        create_breeding_record.CreateBreedingRecordInput(
            animal_id=payload.animal_id,
            breeding_date=payload.breeding_date,
            breeding_method=payload.breeding_method,
            sire_tag=payload.sire_tag,
            sire_breed=payload.sire_breed,
            technician=payload.technician,
            cost=payload.cost,
            notes=payload.notes,
            pregnancy_status=payload.pregnancy_status,
        ),
        actor_user_id=context.actor_user_id,
    )
    return _ensure_success(result, "create breeding record")


@router.post("/records/reconcile", response_model=ReconcileResponse)
async def reconcile_breeding_records_endpoint(
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    result = await reconcile_breeding_records.execute(
        uow, context.farm_id, actor_user_id=context.actor_user_id
    )
    if not result.success:
        raise WriteFailed("Failed to reconcile breeding records", details={"errors": result.errors})
    return result


@router.post(
    "/records/{breeding_record_id}/calving",
    response_model=CalvingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_calving_endpoint(
    breeding_record_id: UUID,
    payload: CalvingRequest,
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    result = await record_calving.execute(
        uow,
        context.farm_id,
        breeding_record_id,
        record_calving.RecordCalvingInput(**payload.model_dump()),
        actor_user_id=context.actor_user_id,
    )
    return _ensure_success(result, "record calving")


@router.post(
    "/events",
    response_model=RegisterBreedingEventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_breeding_event_endpoint(
    payload: BreedingEventCreate,
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    result = await register_breeding_event.execute(
        uow,
        context.farm_id,
        write_breeding_event.WriteBreedingEventInput(
            animal_id=payload.animal_id,
            event_type=payload.event_type,
            event_date=payload.event_date,
            attributes=payload.attributes,
            notes=payload.notes,
        ),
        actor_user_id=context.actor_user_id,
    )
    return _ensure_success(result, "record breeding event")


@router.post("/animals/{animal_id}/insemination", response_model=InseminationResponse)
async def record_insemination_endpoint(
    animal_id: UUID,
    payload: InseminationRequest,
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    result = await record_insemination_event.execute(
        uow,
        context.farm_id,
        record_insemination_event.RecordInseminationEventInput(
            animal_id=animal_id, insemination_date=payload.insemination_date
        ),
        actor_user_id=context.actor_user_id,
    )
    return _ensure_success(result, "apply insemination")


@router.post("/animals/{animal_id}/pregnancy-checks", response_model=PregnancyCheckResponse)
async def record_pregnancy_check_endpoint(
    animal_id: UUID,
    payload: PregnancyCheckRequest,
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    result = await record_pregnancy_check.execute(
        uow,
        context.farm_id,
        record_pregnancy_check.RecordPregnancyCheckInput(
            animal_id=animal_id, **payload.model_dump()
        ),
        actor_user_id=context.actor_user_id,
    )
    return _ensure_success(result, "record pregnancy check")


@router.get("/animals/{animal_id}/dry-off-status", response_model=DryOffStatusResponse)
async def dry_off_status_endpoint(
    animal_id: UUID,
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    return await get_dry_off_status.execute(uow, context.farm_id, animal_id)


@router.get("/animals/{animal_id}/lactation-summary", response_model=LactationSummaryResponse)
async def lactation_summary_endpoint(
    animal_id: UUID,
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    return await get_lactation_summary.execute(uow, context.farm_id, animal_id)


@router.get("/animals/{animal_id}/history", response_model=BreedingHistoryResponse)
async def breeding_history_endpoint(
    animal_id: UUID,
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    return await get_breeding_history.execute(uow, context.farm_id, animal_id)


@router.get("/settings", response_model=BreedingSettingsResponse)
async def get_breeding_settings_endpoint(
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    return await get_breeding_settings.execute(uow, context.farm_id)


@router.put("/settings", response_model=BreedingSettingsResponse)
async def update_breeding_settings_endpoint(
    payload: BreedingSettingsUpdate,
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    return await update_breeding_settings.execute(
        uow,
        context.farm_id,
        update_breeding_settings.UpdateBreedingSettingsInput(**payload.model_dump()),
        actor_user_id=context.actor_user_id,
    )


@router.get("/pregnant", response_model=list[PregnantAnimalResponse])
async def list_pregnant_animals_endpoint(
    due_within_days: int | None = Query(default=None, ge=0),
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    return await list_pregnant_animals.execute(
        uow, context.farm_id, due_within_days=due_within_days
    )


@router.get("/pending-checks", response_model=list[PendingPregnancyCheckResponse])
async def list_pending_pregnancy_checks_endpoint(
    lookback_days: int = Query(default=list_pending_pregnancy_checks.DEFAULT_LOOKBACK_DAYS, gt=0),
    context: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
):
    return await list_pending_pregnancy_checks.execute(
        uow, context.farm_id, lookback_days=lookback_days
    )
