from .base import BaseSchema
from .common import QueryParameters, PagedResult, DEFAULT_PAGE_SIZE
from .country import CreateCountryDto, GetCountryDto, CountryDto, UpdateCountryDto
from .hotel import CreateHotelDto, HotelDto

__all__ = [
    "BaseSchema",
    "QueryParameters",
    "PagedResult",
    "DEFAULT_PAGE_SIZE",
    "CreateCountryDto",
    "GetCountryDto",
    "CountryDto",
    "UpdateCountryDto",
    "CreateHotelDto",
    "HotelDto",
]
