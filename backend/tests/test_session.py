import threading

import pytest

from bolus_ledger.core.errors import ValidationError
from bolus_ledger.core.settings import Settings
from bolus_ledger.services.session import build_session


def test_calculate_records_and_exposes_latest(session):
    bread = session.catalog.add_product({"name": "Bread", "carbs_per_100": 50})
    session.meal.add_entry(bread.id, 100)

    res = session.calculate_bolus(220)

    assert res.total_carbs == pytest.approx(50)
    assert res.total_dose == pytest.approx(7.4)
    assert session.latest == res
    assert session.history.list() == [res]
    assert len(session.meal) == 1


def test_manual_exchange_units_added_to_meal(session):
    apple = session.catalog.add_product({"name": "Apple", "carbs_per_100": 14})
    session.meal.add_entry(apple.id, 100)
    res = session.calculate_bolus(100, manual_exchange_units=2)
    assert res.total_carbs == pytest.approx(34)


def test_clear_meal_after_calculation(session):
    apple = session.catalog.add_product({"name": "Apple", "carbs_per_100": 14})
    session.meal.add_entry(apple.id)
    session.calculate_bolus(120, clear_meal=True)
    assert len(session.meal) == 0


@pytest.mark.parametrize("glucose", [0, -1, float("nan"), "high"])
def test_invalid_glucose_leaves_history_unchanged(session, glucose):
    session.calculate_bolus(120)
    before = session.history.list()

    with pytest.raises(ValidationError):
        session.calculate_bolus(glucose)

    assert session.history.list() == before
    assert session.latest == before[0]


def test_dangling_meal_entry_does_not_break_calculation(session):
    bread = session.catalog.add_product({"name": "Bread", "carbs_per_100": 50})
    session.meal.add_entry(bread.id, 100)
    session.catalog.remove_product(bread.id)

    res = session.calculate_bolus(100)
    assert res.total_carbs == 0
    assert res.total_dose == 0


def test_concurrent_calculations_keep_ledger_bounded(session):
    def worker():
        for _ in range(25):
            session.calculate_bolus(150)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(session.history) == 10
    assert session.latest == session.history.list()[0]


def test_build_session_uses_configured_defaults():
    settings = Settings.model_validate(
        {"dosing": {"target_glucose": 120, "icr": 15, "isf": 40}, "catalog": {"seed_sample_products": False}}
    )
    session = build_session(settings)
    params = session.parameters.get()
    assert (params.target_glucose, params.icr, params.isf, params.insulin_duration_min) == (120, 15, 40, 240)
    assert len(session.catalog) == 0


def test_build_session_seeds_samples_by_default():
    session = build_session(Settings())
    assert len(session.catalog) == 5
