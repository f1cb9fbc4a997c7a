from fastapi import APIRouter

from .countries import router as countries_router
from .hotels import router as hotels_router

api_router = APIRouter(prefix="/api")
api_router.include_router(countries_router)
api_router.include_router(hotels_router)

__all__ = ["api_router"]
