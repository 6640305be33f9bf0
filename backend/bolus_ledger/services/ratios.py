from bolus_ledger.core.constants import ICR_RULE_NUMERATOR, ISF_RULE_NUMERATOR
from bolus_ledger.core.errors import ValidationError
from bolus_ledger.core.validation import is_finite_number
from bolus_ledger.models.dosing import RatioEstimate


def estimate_ratios(total_daily_dose: float) -> RatioEstimate:
    """
    Starting-point ratios from the total daily insulin dose (TDD):
    500 rule for ICR (g/U), 1800 rule for ISF (mg/dL/U).
    Does not touch the stored dosing parameters.
    """
    if not is_finite_number(total_daily_dose) or total_daily_dose <= 0:
        raise ValidationError("invalid total daily dose")

    tdd = float(total_daily_dose)
    return RatioEstimate(
        total_daily_dose=tdd,
        icr=round(ICR_RULE_NUMERATOR / tdd, 1),
        isf=float(round(ISF_RULE_NUMERATOR / tdd)),
    )


__all__ = ["estimate_ratios"]
