from hotel_listing.models import Country, Hotel
from hotel_listing.schemas import (
    CountryDto,
    CreateCountryDto,
    CreateHotelDto,
    GetCountryDto,
    HotelDto,
    UpdateCountryDto,
)

from .mapper import Mapper


def build_mapper() -> Mapper:
    """Register every (entity, representation) pair the API reads or writes."""
    mapper = Mapper()

    # countries
    mapper.create_map(CreateCountryDto, Country)
    mapper.create_map(Country, GetCountryDto)
    mapper.create_map(Country, CountryDto)
    mapper.create_map(UpdateCountryDto, Country)

    # hotels
    mapper.create_map(Hotel, HotelDto, reverse=True)
    mapper.create_map(CreateHotelDto, Hotel)

    return mapper
