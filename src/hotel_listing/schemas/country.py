from pydantic import Field

from .base import BaseSchema
from .hotel import HotelDto


class BaseCountryDto(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    short_name: str | None = Field(None, max_length=10)


class CreateCountryDto(BaseCountryDto):
    """Request body for POST /api/countries."""


class GetCountryDto(BaseCountryDto):
    """Flat country representation used by list endpoints."""

    id: int


class CountryDto(BaseCountryDto):
    """Country detail representation, including its hotels."""

    id: int
    hotels: list[HotelDto] = Field(default_factory=list)


class UpdateCountryDto(BaseCountryDto):
    """Request body for PUT /api/countries/{id}; `id` must match the path."""

    id: int
