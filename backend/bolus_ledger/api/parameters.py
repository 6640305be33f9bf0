from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from bolus_ledger.api.deps import get_session
from bolus_ledger.core.errors import ValidationError
from bolus_ledger.models.dosing import DosingParameters, RatioEstimate
from bolus_ledger.services.ratios import estimate_ratios
from bolus_ledger.services.session import SessionState

router = APIRouter()


class ParametersUpdate(BaseModel):
    # Range checks happen in the store so a rejected update never half-applies.
    target_glucose: Optional[float] = None
    icr: Optional[float] = None
    isf: Optional[float] = None
    insulin_duration_min: Optional[float] = None


class EstimateRequest(BaseModel):
    total_daily_dose: float


@router.get("/", response_model=DosingParameters)
async def get_parameters(session: SessionState = Depends(get_session)):
    return session.parameters.get()


@router.put("/", response_model=DosingParameters)
async def update_parameters(payload: ParametersUpdate, session: SessionState = Depends(get_session)):
    try:
        return session.parameters.set(payload.model_dump(exclude_none=True))
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.post("/estimate", response_model=RatioEstimate, summary="Estimate ICR/ISF from total daily dose")
async def estimate(payload: EstimateRequest):
    try:
        return estimate_ratios(payload.total_daily_dose)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
