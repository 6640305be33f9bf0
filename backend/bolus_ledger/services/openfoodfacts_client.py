import logging
from typing import Any, Optional

import httpx

from bolus_ledger.core.errors import ValidationError
from bolus_ledger.core.validation import is_finite_number
from bolus_ledger.models.enums import MeasurementUnit, ProductCategory
from bolus_ledger.models.nutrition import NutritionRecord
from bolus_ledger.models.product import ProductData
from bolus_ledger.services.catalog import parse_product_data

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT_NAME = "Unknown product"


class NutritionLookupError(Exception):
    """Raised when the food database cannot be reached or answers garbage."""


def _number(nutriments: dict[str, Any], key: str) -> Optional[float]:
    value = nutriments.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    # JSON such as 1e400 decodes to inf.
    return number if is_finite_number(number) and number >= 0 else None


def parse_product_payload(barcode: str, payload: dict[str, Any]) -> Optional[NutritionRecord]:
    if payload.get("status") != 1:
        return None
    product = payload.get("product")
    if not isinstance(product, dict):
        product = {}
    nutriments = product.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}
    name = product.get("product_name")
    if not isinstance(name, str):
        name = ""
    return NutritionRecord(
        name=name.strip() or UNKNOWN_PRODUCT_NAME,
        barcode=barcode,
        carbs_per_100=_number(nutriments, "carbohydrates_100g") or 0.0,
        protein_per_100=_number(nutriments, "proteins_100g"),
        fat_per_100=_number(nutriments, "fat_100g"),
        calories_per_100=_number(nutriments, "energy-kcal_100g"),
        unit=MeasurementUnit.GRAMS,
    )


def nutrition_record_to_product_data(record: NutritionRecord) -> ProductData:
    """Raises the domain ValidationError when the record cannot become a catalog product."""
    data = record.model_dump()
    data["category"] = ProductCategory.OTHER
    return parse_product_data(data)


class OpenFoodFactsClient:
    def __init__(
        self,
        base_url: str = "https://world.openfoodfacts.org",
        timeout_seconds: float = 8.0,
        user_agent: str = "bolus-ledger/0.1",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            headers={"Accept": "application/json", "User-Agent": user_agent},
        )

    async def _handle_response(self, response: httpx.Response) -> Any:
        try:
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                return {"status": 0}
            logger.error("OpenFoodFacts API error", extra={"status_code": exc.response.status_code})
            raise NutritionLookupError(f"OpenFoodFacts returned status {exc.response.status_code}") from exc
        except ValueError as exc:
            preview = response.text[:200]
            logger.error(f"Invalid JSON from OpenFoodFacts. Body: {preview!r}")
            raise NutritionLookupError("OpenFoodFacts returned invalid JSON") from exc

    async def resolve_by_barcode(self, barcode: str) -> Optional[NutritionRecord]:
        """Nutrition record for `barcode`, or None when the database does not know it."""
        code = (barcode or "").strip()
        if not code:
            raise ValidationError("barcode must not be empty")
        try:
            response = await self.client.get(f"/api/v0/product/{code}.json")
        except httpx.HTTPError as exc:
            logger.warning("OpenFoodFacts lookup failed for %s: %s", code, exc)
            raise NutritionLookupError(f"OpenFoodFacts unreachable: {exc}") from exc

        payload = await self._handle_response(response)
        if not isinstance(payload, dict):
            raise NutritionLookupError("OpenFoodFacts returned an unexpected payload")
        record = parse_product_payload(code, payload)
        if record is None:
            logger.info("Barcode %s not found in OpenFoodFacts", code)
        return record

    async def aclose(self) -> None:
        await self.client.aclose()


__all__ = [
    "OpenFoodFactsClient",
    "NutritionLookupError",
    "parse_product_payload",
    "nutrition_record_to_product_data",
]
