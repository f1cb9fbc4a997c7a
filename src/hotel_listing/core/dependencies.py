from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_listing.database.session import get_async_session
from hotel_listing.mapping import Mapper, build_mapper
from hotel_listing.repositories import CountriesRepository, HotelsRepository


@lru_cache
def get_mapper() -> Mapper:
    # built once; read-only afterwards
    return build_mapper()


def get_countries_repository(
    db: AsyncSession = Depends(get_async_session),
    mapper: Mapper = Depends(get_mapper),
) -> CountriesRepository:
    return CountriesRepository(db, mapper)


def get_hotels_repository(
    db: AsyncSession = Depends(get_async_session),
    mapper: Mapper = Depends(get_mapper),
) -> HotelsRepository:
    return HotelsRepository(db, mapper)
