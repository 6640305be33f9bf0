from typing import Optional

from pydantic import BaseModel, Field

from bolus_ledger.models.product import Product


class MealSelectionEntry(BaseModel):
    product_id: str
    quantity: float = Field(default=0.0, ge=0)


class MealLine(BaseModel):
    index: int
    product_id: str
    quantity: float
    # None when the product was deleted from the catalog after being added.
    product: Optional[Product] = None
    carbs_g: float = 0.0
