from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from bolus_ledger.core.constants import CARB_EXCHANGE_GRAMS
from bolus_ledger.core.errors import ValidationError
from bolus_ledger.core.validation import is_finite_number
from bolus_ledger.models.bolus import BolusCalculationResult
from bolus_ledger.models.dosing import DosingParameters

logger = logging.getLogger(__name__)


def calculate(
    glucose: Any,
    total_carbs_g: float,
    manual_exchange_units: float,
    params: DosingParameters,
    timestamp: Optional[datetime] = None,
) -> BolusCalculationResult:
    """
    Bolus = meal part + correction part, floored at 0.

    meal = (carbs + exchange_units * 10) / ICR
    correction = (BG - target) / ISF, negative below target

    Pure: the caller decides whether to record the result in the history.
    """
    if not is_finite_number(glucose) or glucose <= 0:
        raise ValidationError("invalid glucose reading")
    if not is_finite_number(total_carbs_g) or total_carbs_g < 0:
        raise ValidationError("invalid carbohydrate total")
    if not is_finite_number(manual_exchange_units) or manual_exchange_units < 0:
        raise ValidationError("invalid carbohydrate exchange units")
    # Re-checked here so a bad ratio can never produce inf/nan doses.
    if not is_finite_number(params.icr) or params.icr <= 0:
        raise ValidationError("ICR must be greater than 0")
    if not is_finite_number(params.isf) or params.isf <= 0:
        raise ValidationError("ISF must be greater than 0")

    effective_carbs = total_carbs_g + manual_exchange_units * CARB_EXCHANGE_GRAMS
    meal_dose = effective_carbs / params.icr
    correction_dose = (glucose - params.target_glucose) / params.isf
    total_dose = max(0.0, meal_dose + correction_dose)

    logger.debug(
        "Bolus: carbs %.1f g / ICR %s = %.2f U, correction (%s - %s) / ISF %s = %.2f U, total %.2f U",
        effective_carbs, params.icr, meal_dose,
        glucose, params.target_glucose, params.isf, correction_dose, total_dose,
    )

    return BolusCalculationResult(
        timestamp=timestamp or datetime.now(timezone.utc),
        glucose=float(glucose),
        total_carbs=float(effective_carbs),
        meal_dose=meal_dose,
        correction_dose=correction_dose,
        total_dose=total_dose,
    )


__all__ = ["calculate"]
