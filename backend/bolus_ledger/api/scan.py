import logging

from fastapi import APIRouter, Depends, HTTPException, status

from bolus_ledger.api.deps import get_nutrition_resolver, get_session
from bolus_ledger.core.errors import ValidationError
from bolus_ledger.models.nutrition import NutritionRecord
from bolus_ledger.models.product import Product
from bolus_ledger.services.openfoodfacts_client import (
    NutritionLookupError,
    OpenFoodFactsClient,
    nutrition_record_to_product_data,
)
from bolus_ledger.services.session import SessionState

logger = logging.getLogger(__name__)

router = APIRouter()


async def _resolve(barcode: str, resolver: OpenFoodFactsClient) -> NutritionRecord:
    try:
        record = await resolver.resolve_by_barcode(barcode)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    except NutritionLookupError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Barcode {barcode} not found")
    return record


@router.get("/{barcode}", response_model=NutritionRecord, summary="Look up a barcode")
async def lookup_barcode(barcode: str, resolver: OpenFoodFactsClient = Depends(get_nutrition_resolver)):
    return await _resolve(barcode, resolver)


@router.post(
    "/{barcode}",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Look up a barcode and add it to the catalog",
)
async def add_scanned_product(
    barcode: str,
    resolver: OpenFoodFactsClient = Depends(get_nutrition_resolver),
    session: SessionState = Depends(get_session),
):
    record = await _resolve(barcode, resolver)
    try:
        return session.catalog.add_product(nutrition_record_to_product_data(record))
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
