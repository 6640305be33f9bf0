from fastapi import APIRouter

from .bolus import router as bolus_router
from .health import router as health_router
from .meal import router as meal_router
from .parameters import router as parameters_router
from .products import router as products_router
from .scan import router as scan_router

api_router = APIRouter()
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(products_router, prefix="/products", tags=["products"])
api_router.include_router(parameters_router, prefix="/parameters", tags=["parameters"])
api_router.include_router(meal_router, prefix="/meal", tags=["meal"])
api_router.include_router(bolus_router, prefix="/bolus", tags=["bolus"])
api_router.include_router(scan_router, prefix="/scan", tags=["scan"])

__all__ = ["api_router"]
