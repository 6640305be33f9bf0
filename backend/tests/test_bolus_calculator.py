import math
from datetime import datetime, timezone

import pytest

from bolus_ledger.core.errors import ValidationError
from bolus_ledger.models.dosing import DosingParameters
from bolus_ledger.services.bolus import calculate


def test_on_target_without_carbs_is_zero(params):
    res = calculate(100, 0, 0, params)
    assert res.meal_dose == 0
    assert res.correction_dose == 0
    assert res.total_dose == 0


def test_meal_plus_correction(params):
    # 50 g / 10 = 5.0 U, (220 - 100) / 50 = 2.4 U
    res = calculate(220, 50, 0, params)
    assert res.meal_dose == pytest.approx(5.0)
    assert res.correction_dose == pytest.approx(2.4)
    assert res.total_dose == pytest.approx(7.4)
    assert res.glucose == 220
    assert res.total_carbs == 50


def test_negative_correction_reduces_meal_dose(params):
    # 1 exchange = 10 g -> 1.0 U, (60 - 100) / 50 = -0.8 U
    res = calculate(60, 0, 1, params)
    assert res.total_carbs == pytest.approx(10)
    assert res.meal_dose == pytest.approx(1.0)
    assert res.correction_dose == pytest.approx(-0.8)
    assert res.total_dose == pytest.approx(0.2)


def test_total_is_floored_but_breakdown_stays_signed(params):
    res = calculate(40, 0, 0, params)
    assert res.correction_dose == pytest.approx(-1.2)
    assert res.total_dose == 0.0


def test_exchange_units_add_to_catalog_carbs(params):
    res = calculate(100, 25, 2.5, params)
    assert res.total_carbs == pytest.approx(50)
    assert res.meal_dose == pytest.approx(5.0)


@pytest.mark.parametrize("glucose", [0, -5, float("nan"), float("inf"), "120", None, True])
def test_invalid_glucose_rejected(params, glucose):
    with pytest.raises(ValidationError, match="invalid glucose reading"):
        calculate(glucose, 10, 0, params)


def test_negative_exchange_units_rejected(params):
    with pytest.raises(ValidationError):
        calculate(120, 0, -1, params)


def test_zero_ratios_rejected_defensively():
    # model_construct skips field validation, like a record mutated behind the store's back
    bad_icr = DosingParameters.model_construct(target_glucose=100, icr=0, isf=50, insulin_duration_min=240)
    bad_isf = DosingParameters.model_construct(target_glucose=100, icr=10, isf=-3, insulin_duration_min=240)
    with pytest.raises(ValidationError):
        calculate(120, 10, 0, bad_icr)
    with pytest.raises(ValidationError):
        calculate(120, 10, 0, bad_isf)


def test_total_never_negative_over_grid(params):
    for glucose in (1, 20, 55, 99, 100, 180, 400):
        for carbs in (0, 0.5, 12, 80):
            for units in (0, 0.5, 3):
                res = calculate(glucose, carbs, units, params)
                assert res.total_dose >= 0
                assert math.isclose(res.total_dose, max(0.0, res.meal_dose + res.correction_dose))


def test_timestamp_passthrough(params):
    ts = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    res = calculate(150, 10, 0, params, timestamp=ts)
    assert res.timestamp == ts
