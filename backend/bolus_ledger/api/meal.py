from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from bolus_ledger.api.deps import get_session
from bolus_ledger.core.constants import DEFAULT_MEAL_QUANTITY
from bolus_ledger.core.errors import NotFoundError, ValidationError
from bolus_ledger.models.meal import MealLine
from bolus_ledger.services.session import SessionState

router = APIRouter()


class MealView(BaseModel):
    lines: list[MealLine]
    total_carbs_g: float


class AddEntryRequest(BaseModel):
    product_id: str
    quantity: float = DEFAULT_MEAL_QUANTITY


class QuantityChange(BaseModel):
    # Either a relative step (+/-) or an absolute quantity.
    delta: Optional[float] = None
    quantity: Optional[float] = None


def _view(session: SessionState) -> MealView:
    lines = session.meal.lines(session.catalog)
    return MealView(lines=lines, total_carbs_g=sum((line.carbs_g for line in lines), 0.0))


@router.get("/", response_model=MealView)
async def get_meal(session: SessionState = Depends(get_session)):
    return _view(session)


@router.post("/entries", response_model=MealView, status_code=status.HTTP_201_CREATED)
async def add_entry(payload: AddEntryRequest, session: SessionState = Depends(get_session)):
    try:
        session.catalog.get(payload.product_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    session.meal.add_entry(payload.product_id, payload.quantity)
    return _view(session)


@router.patch("/entries/{index}", response_model=MealView)
async def change_quantity(index: int, payload: QuantityChange, session: SessionState = Depends(get_session)):
    if (payload.delta is None) == (payload.quantity is None):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Provide exactly one of 'delta' or 'quantity'",
        )
    try:
        if payload.delta is not None:
            session.meal.adjust_quantity(index, payload.delta)
        else:
            session.meal.set_quantity(index, payload.quantity)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return _view(session)


@router.delete("/entries/{index}", response_model=MealView)
async def remove_entry(index: int, session: SessionState = Depends(get_session)):
    try:
        session.meal.remove_entry(index)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return _view(session)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def clear_meal(session: SessionState = Depends(get_session)):
    session.meal.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
