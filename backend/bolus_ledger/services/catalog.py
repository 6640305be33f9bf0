from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from pyuca import Collator

from bolus_ledger.core.errors import NotFoundError, ValidationError
from bolus_ledger.models.enums import CatalogSort, ProductCategory
from bolus_ledger.models.product import Product, ProductData

logger = logging.getLogger(__name__)

ProductInput = Union[ProductData, Mapping[str, Any]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Loads the Unicode collation table; built once, on the first name sort.
    return Collator()


def _name_key(name: str) -> tuple[int, ...]:
    # UCA order: "Łosoś" sorts between "Lody" and "Masło", "Éclair" next to "eclair".
    return _collator().sort_key(name)


def parse_product_data(data: ProductInput) -> ProductData:
    if isinstance(data, ProductData):
        data = data.model_dump()
    try:
        return ProductData.model_validate(data)
    except PydanticValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise ValidationError(f"Invalid product data ({fields})") from exc


class ProductCatalog:
    """In-memory set of known food products, keyed by id in insertion order."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._products: dict[str, Product] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._products)

    def add_product(self, data: ProductInput) -> Product:
        fields = parse_product_data(data)
        product = Product(id=uuid.uuid4().hex, created_at=self._clock(), **fields.model_dump())
        with self._lock:
            self._products[product.id] = product
        logger.info("Product added", extra={"product_id": product.id, "product_name": product.name})
        return product

    def update_product(self, product_id: str, data: ProductInput) -> Product:
        fields = parse_product_data(data)
        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                raise NotFoundError(f"Product {product_id} not found")
            product = Product(id=current.id, created_at=current.created_at, **fields.model_dump())
            self._products[product_id] = product
        logger.info("Product updated", extra={"product_id": product_id})
        return product

    def remove_product(self, product_id: str) -> None:
        with self._lock:
            if product_id not in self._products:
                raise NotFoundError(f"Product {product_id} not found")
            del self._products[product_id]
        logger.info("Product removed", extra={"product_id": product_id})

    def find(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def get(self, product_id: str) -> Product:
        product = self.find(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def list(
        self,
        query: Optional[str] = None,
        category: Optional[ProductCategory] = None,
        sort: Optional[CatalogSort] = None,
    ) -> list[Product]:
        products = list(self._products.values())

        if query:
            needle = query.casefold()
            products = [p for p in products if needle in p.name.casefold()]
        if category:
            try:
                wanted = ProductCategory(category)
            except ValueError as exc:
                raise ValidationError(f"Unknown category {category!r}") from exc
            products = [p for p in products if p.category == wanted]

        if sort:
            try:
                sort = CatalogSort(sort)
            except ValueError as exc:
                raise ValidationError(f"Unknown sort {sort!r}") from exc
            if sort in (CatalogSort.DATE_ASC, CatalogSort.DATE_DESC):
                products.sort(key=lambda p: p.created_at, reverse=sort == CatalogSort.DATE_DESC)
            else:
                products.sort(key=lambda p: _name_key(p.name), reverse=sort == CatalogSort.NAME_DESC)
        return products


def list_categories() -> list[ProductCategory]:
    return list(ProductCategory)


SAMPLE_PRODUCTS: list[dict[str, Any]] = [
    {"name": "Wheat bread", "unit": "g", "carbs_per_100": 50, "protein_per_100": 8,
     "fat_per_100": 1, "calories_per_100": 250, "category": "bakery"},
    {"name": "Apple", "unit": "g", "carbs_per_100": 14, "protein_per_100": 0.3,
     "fat_per_100": 0.2, "calories_per_100": 52, "category": "fruit"},
    {"name": "Milk 2%", "unit": "ml", "carbs_per_100": 4.8, "protein_per_100": 3.2,
     "fat_per_100": 2, "calories_per_100": 50, "category": "dairy"},
    {"name": "Natural yogurt", "unit": "g", "carbs_per_100": 4.5, "protein_per_100": 3.5,
     "fat_per_100": 3, "calories_per_100": 60, "category": "dairy"},
    {"name": "Wheat pasta", "unit": "g", "carbs_per_100": 75, "protein_per_100": 12,
     "fat_per_100": 1.5, "calories_per_100": 350, "category": "bakery", "notes": "Dry weight"},
]


def seed_sample_products(catalog: ProductCatalog) -> list[Product]:
    return [catalog.add_product(item) for item in SAMPLE_PRODUCTS]


__all__ = [
    "ProductCatalog",
    "parse_product_data",
    "list_categories",
    "seed_sample_products",
    "SAMPLE_PRODUCTS",
]
