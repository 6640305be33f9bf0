import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from bolus_ledger.api.deps import get_session
from bolus_ledger.core.errors import ValidationError
from bolus_ledger.models.bolus import BolusCalculationResult
from bolus_ledger.services.session import SessionState

logger = logging.getLogger(__name__)

router = APIRouter()


class BolusCalcRequest(BaseModel):
    glucose_mgdl: float
    manual_exchange_units: float = Field(default=0.0, description="Carbohydrate exchanges (10 g each)")
    clear_meal: bool = False


@router.post("/calc", response_model=BolusCalculationResult, summary="Calculate bolus for the current meal")
async def calculate_bolus(payload: BolusCalcRequest, session: SessionState = Depends(get_session)):
    try:
        return session.calculate_bolus(
            payload.glucose_mgdl,
            manual_exchange_units=payload.manual_exchange_units,
            clear_meal=payload.clear_meal,
        )
    except ValidationError as exc:
        logger.warning("Bolus calculation rejected: %s", exc)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.get("/latest", response_model=BolusCalculationResult)
async def latest_bolus(session: SessionState = Depends(get_session)):
    if session.latest is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No calculation yet")
    return session.latest


@router.get("/history", response_model=list[BolusCalculationResult])
async def bolus_history(session: SessionState = Depends(get_session)):
    return session.history.list()
