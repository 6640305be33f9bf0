from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from bolus_ledger.api.deps import get_session
from bolus_ledger.core.errors import NotFoundError, ValidationError
from bolus_ledger.models.enums import CatalogSort, ProductCategory
from bolus_ledger.models.product import Product, ProductData
from bolus_ledger.services.catalog import list_categories
from bolus_ledger.services.session import SessionState

router = APIRouter()


@router.get("/", response_model=list[Product], summary="List catalog products")
async def list_products(
    q: Optional[str] = None,
    category: Optional[ProductCategory] = None,
    sort: Optional[CatalogSort] = None,
    session: SessionState = Depends(get_session),
):
    return session.catalog.list(query=q, category=category, sort=sort)


@router.get("/categories", response_model=list[ProductCategory])
async def categories():
    return list_categories()


@router.post("/", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductData, session: SessionState = Depends(get_session)):
    try:
        return session.catalog.add_product(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, session: SessionState = Depends(get_session)):
    try:
        return session.catalog.get(product_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    payload: ProductData,
    session: SessionState = Depends(get_session),
):
    try:
        return session.catalog.update_product(product_id, payload)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: str, session: SessionState = Depends(get_session)):
    try:
        session.catalog.remove_product(product_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
