from sqlalchemy.ext.asyncio import AsyncSession

from hotel_listing.mapping.mapper import Mapper
from hotel_listing.models.hotel import Hotel

from .generic_repository import GenericRepository


class HotelsRepository(GenericRepository[Hotel]):
    def __init__(self, db: AsyncSession, mapper: Mapper):
        super().__init__(Hotel, db, mapper)
