from .generic_repository import GenericRepository
from .countries_repository import CountriesRepository
from .hotels_repository import HotelsRepository

__all__ = ["GenericRepository", "CountriesRepository", "HotelsRepository"]
