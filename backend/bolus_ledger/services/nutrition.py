from bolus_ledger.models.product import Product


def carbs_contribution(product: Product, quantity: float) -> float:
    """
    Carbohydrate grams contributed by `quantity` g/ml of `product`.

    Nutrition labels are per 100 units, so scaling is linear. The product's
    declared unit is not checked against the quantity.
    """
    return (product.carbs_per_100 / 100.0) * quantity


__all__ = ["carbs_contribution"]
