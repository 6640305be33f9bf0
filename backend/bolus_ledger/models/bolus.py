from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BolusCalculationResult(BaseModel):
    timestamp: datetime
    glucose: float
    total_carbs: float
    # Stored unclamped so the breakdown stays readable when total_dose is floored.
    meal_dose: float
    correction_dose: float
    total_dose: float

    model_config = ConfigDict(frozen=True)
