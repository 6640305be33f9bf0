import pytest

from bolus_ledger.core.errors import ValidationError
from bolus_ledger.models.dosing import DosingParameters
from bolus_ledger.services.dosing import DosingParametersStore


def test_defaults():
    params = DosingParametersStore().get()
    assert params.target_glucose == 100
    assert params.icr == 10
    assert params.isf == 50
    assert params.insulin_duration_min == 240


def test_partial_update_keeps_other_fields():
    store = DosingParametersStore()
    updated = store.set({"icr": 12.5})
    assert updated.icr == 12.5
    assert updated.isf == 50
    assert store.get() == updated


def test_full_update():
    store = DosingParametersStore()
    new = DosingParameters(target_glucose=110, icr=15, isf=40, insulin_duration_min=180)
    assert store.set(new) == new


@pytest.mark.parametrize(
    "changes",
    [
        {"target_glucose": 0},
        {"icr": 0},
        {"isf": -10},
        {"insulin_duration_min": 0},
        {"icr": 12, "isf": 0},
        {"icr": "many"},
        {"icr": float("inf")},
        {"basal_rate": 1.0},
    ],
)
def test_rejected_update_leaves_previous_intact(changes):
    store = DosingParametersStore()
    before = store.get()
    with pytest.raises(ValidationError):
        store.set(changes)
    assert store.get() == before
