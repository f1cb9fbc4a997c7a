from pydantic import Field

from .base import BaseSchema


class BaseHotelDto(BaseSchema):
    name: str = Field(..., min_length=1, max_length=150)
    address: str | None = Field(None, max_length=255)
    rating: float | None = None
    country_id: int = Field(..., ge=1)


class CreateHotelDto(BaseHotelDto):
    """Request body for POST /api/hotels."""


class HotelDto(BaseHotelDto):
    """Hotel representation returned by the API; also the PUT body."""

    id: int
