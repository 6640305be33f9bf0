from typing import Optional

from pydantic import BaseModel

from bolus_ledger.models.enums import MeasurementUnit


class NutritionRecord(BaseModel):
    """Nutrition facts resolved for a barcode by an external food database."""

    name: str
    barcode: str
    carbs_per_100: float = 0.0
    protein_per_100: Optional[float] = None
    fat_per_100: Optional[float] = None
    calories_per_100: Optional[float] = None
    unit: MeasurementUnit = MeasurementUnit.GRAMS
