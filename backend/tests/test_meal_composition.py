import pytest

from bolus_ledger.core.errors import NotFoundError, ValidationError
from bolus_ledger.services.meal import MealComposition


@pytest.fixture
def bread(catalog):
    return catalog.add_product({"name": "Wheat bread", "carbs_per_100": 50, "category": "bakery"})


@pytest.fixture
def apple(catalog):
    return catalog.add_product({"name": "Apple", "carbs_per_100": 14, "category": "fruit"})


def test_default_quantity_is_100(bread):
    meal = MealComposition()
    entry = meal.add_entry(bread.id)
    assert entry.quantity == 100


def test_same_product_twice_gives_two_lines(catalog, bread):
    meal = MealComposition()
    meal.add_entry(bread.id, 40)
    meal.add_entry(bread.id, 60)
    assert len(meal) == 2
    assert meal.total_carbs(catalog) == pytest.approx(50)


def test_total_carbs_sums_entries(catalog, bread, apple):
    meal = MealComposition()
    meal.add_entry(bread.id, 60)   # 30 g
    meal.add_entry(apple.id, 150)  # 21 g
    assert meal.total_carbs(catalog) == pytest.approx(51)


def test_empty_meal_has_no_carbs(catalog):
    assert MealComposition().total_carbs(catalog) == 0.0


@pytest.mark.parametrize("delta", [-1000, -100.5, -1, 0, 0.5, 25])
def test_adjust_quantity_clamps_at_zero(bread, delta):
    meal = MealComposition()
    meal.add_entry(bread.id, 100)
    entry = meal.adjust_quantity(0, delta)
    assert entry.quantity == max(0, 100 + delta)


def test_adjust_quantity_rejects_overflow(catalog, bread):
    meal = MealComposition()
    meal.add_entry(bread.id, 1e308)
    with pytest.raises(ValidationError):
        meal.adjust_quantity(0, 1e308)
    assert meal.entries[0].quantity == 1e308
    assert meal.total_carbs(catalog) == pytest.approx(5e307)


@pytest.mark.parametrize(
    "value,expected",
    [(-5, 0), (0, 0), (12.5, 12.5), ("30", 30), ("abc", 0), (None, 0), (float("nan"), 0), (float("inf"), 0)],
)
def test_set_quantity(bread, value, expected):
    meal = MealComposition()
    meal.add_entry(bread.id, 100)
    assert meal.set_quantity(0, value).quantity == expected


def test_remove_entry_shifts_indices(catalog, bread, apple):
    meal = MealComposition()
    meal.add_entry(bread.id, 10)
    meal.add_entry(apple.id, 20)
    meal.remove_entry(0)
    assert [e.product_id for e in meal.entries] == [apple.id]
    assert meal.lines(catalog)[0].index == 0


def test_bad_index_raises_not_found(bread):
    meal = MealComposition()
    meal.add_entry(bread.id)
    for op in (lambda: meal.adjust_quantity(3, 1), lambda: meal.set_quantity(-1, 1), lambda: meal.remove_entry(1)):
        with pytest.raises(NotFoundError):
            op()
    assert len(meal) == 1


def test_deleted_product_contributes_zero(catalog, bread, apple):
    meal = MealComposition()
    meal.add_entry(bread.id, 100)
    meal.add_entry(apple.id, 100)
    catalog.remove_product(bread.id)

    assert meal.total_carbs(catalog) == pytest.approx(14)
    lines = meal.lines(catalog)
    assert lines[0].product is None
    assert lines[0].carbs_g == 0
    assert len(meal) == 2


def test_clear(bread):
    meal = MealComposition()
    meal.add_entry(bread.id)
    meal.clear()
    assert len(meal) == 0
