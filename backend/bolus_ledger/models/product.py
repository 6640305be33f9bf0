from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bolus_ledger.models.enums import MeasurementUnit, ProductCategory


class ProductData(BaseModel):
    """Editable fields of a catalog product (everything but id and created_at)."""

    name: str = Field(min_length=1)
    barcode: Optional[str] = None
    unit: MeasurementUnit = MeasurementUnit.GRAMS
    carbs_per_100: float = Field(ge=0, description="Carbohydrates (g) per 100 g/ml")
    protein_per_100: Optional[float] = Field(default=None, ge=0)
    fat_per_100: Optional[float] = Field(default=None, ge=0)
    calories_per_100: Optional[float] = Field(default=None, ge=0, description="kcal per 100 g/ml")
    category: ProductCategory = ProductCategory.OTHER
    notes: Optional[str] = None

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("barcode", "notes", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Product(ProductData):
    id: str
    created_at: datetime

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)
