import logging

from sqlalchemy.ext.asyncio import AsyncSession

from hotel_listing.exceptions.base import NotFoundError
from hotel_listing.exceptions.integrity_mapper import db_error_handler
from hotel_listing.mapping.mapper import Mapper
from hotel_listing.models.country import Country
from hotel_listing.schemas.country import CountryDto

from .generic_repository import GenericRepository

logger = logging.getLogger(__name__)

GET_DETAILS_SUBJECT = "GetDetails"


class CountriesRepository(GenericRepository[Country]):
    """Countries, plus the detail read that includes each country's hotels."""

    def __init__(self, db: AsyncSession, mapper: Mapper):
        super().__init__(Country, db, mapper)

    async def get_details(self, entity_id: int) -> CountryDto:
        """
        One country with its hotels, fetched in a single statement.

        Raises:
            NotFoundError: subject "GetDetails", key `entity_id`.
        """
        projection = self.mapper.projection(Country, CountryDto)

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(projection.statement().where(Country.id == entity_id))
            items = projection.materialize(result)

        if not items:
            logger.info("repo.get_details.not_found", extra=self._log_extra("get_details", id=entity_id))
            raise NotFoundError(GET_DETAILS_SUBJECT, entity_id)

        logger.debug(
            "repo.get_details.success",
            extra=self._log_extra("get_details", id=entity_id, hotels=len(items[0].hotels)),
        )
        return items[0]
