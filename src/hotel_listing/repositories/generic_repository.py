"""
Generic repository: CRUD, offset pagination and projected reads/writes for any
mapped entity.

A repository is bound to one entity type at construction. Representation types
are chosen per call and passed as classes (`get_all_as(GetCountryDto)`); the
shared `Mapper` must have a map registered for every pair a caller uses.

Transaction rules:
  - every mutating method commits exactly once;
  - on failure the session is rolled back (see `db_error_handler`) and the
    error is classified: constraint violations become `BadRequestError`,
    anything else a `RepositoryError`.
"""

import time
import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import func, inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_listing.database.base import Base
from hotel_listing.exceptions.base import BadRequestError, NotFoundError
from hotel_listing.exceptions.integrity_mapper import db_error_handler
from hotel_listing.mapping.mapper import Mapper
from hotel_listing.schemas.common import PagedResult, QueryParameters

ModelType = TypeVar("ModelType", bound=Base)
R = TypeVar("R")

logger = logging.getLogger(__name__)

NO_KEY_PROVIDED = "No Key Provided"
INVALID_ID_MESSAGE = "Invalid Id used in request"


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class GenericRepository(Generic[ModelType]):
    """
    Type Parameters:
        ModelType: the SQLAlchemy entity this repository manages.
    """

    def __init__(self, model: type[ModelType], db: AsyncSession, mapper: Mapper):
        """
        Args:
            model: the entity class (not an instance), e.g. `Hotel`
            db: request-scoped async session
            mapper: the process-wide representation mapper
        """
        self.model = model
        self.db = db
        self.mapper = mapper
        self._pk = sa_inspect(model).primary_key[0]
        self._pk_attr = sa_inspect(model).get_property_by_column(self._pk).key

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def _log_extra(self, operation: str, **extra: Any) -> dict[str, Any]:
        return {"model": self.model_name, "operation": operation, **extra}

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def get_all(self) -> list[ModelType]:
        """All entities, ordered by primary key."""
        start = time.perf_counter()
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(select(self.model).order_by(self._pk))
            entities = list(result.scalars().all())

        logger.debug(
            "repo.get_all.success",
            extra=self._log_extra("get_all", count=len(entities), duration_ms=_elapsed_ms(start)),
        )
        return entities

    async def get_all_as(self, result_type: type[R]) -> list[R]:
        """All entities projected to `result_type` inside the SQL statement."""
        projection = self.mapper.projection(self.model, result_type)

        start = time.perf_counter()
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(projection.statement().order_by(self._pk))
            items = projection.materialize(result)

        logger.debug(
            "repo.get_all_as.success",
            extra=self._log_extra(
                "get_all_as", result_type=result_type.__name__, count=len(items), duration_ms=_elapsed_ms(start)
            ),
        )
        return items

    async def get_paged(self, result_type: type[R], query_parameters: QueryParameters) -> PagedResult[R]:
        """
        One page of entities projected to `result_type`.

        The slice starts at `start_index` (not `page_number * page_size`); `page_number`
        is echoed back for the client. Negative offsets and sizes are clamped to 0, and
        `record_number` echoes the clamped size so `len(items) <= record_number` holds.

        The total count and the slice are two separate statements with no shared
        snapshot, so a concurrent insert or delete can make `total_count` disagree
        with the rows actually returned.
        """
        projection = self.mapper.projection(self.model, result_type)
        offset = max(0, query_parameters.start_index)
        limit = max(0, query_parameters.page_size)

        start = time.perf_counter()
        total = await self.count()

        async with db_error_handler(self.db, self.model_name):
            stmt = projection.statement().order_by(self._pk).offset(offset).limit(limit)
            result = await self.db.execute(stmt)
            items = projection.materialize(result)

        logger.debug(
            "repo.get_paged.success",
            extra=self._log_extra(
                "get_paged",
                result_type=result_type.__name__,
                offset=offset,
                limit=limit,
                total_count=total,
                duration_ms=_elapsed_ms(start),
            ),
        )
        return PagedResult[result_type](
            items=items,
            page_number=query_parameters.page_number,
            record_number=limit,
            total_count=total,
        )

    async def get(self, entity_id: int | None) -> ModelType | None:
        """The entity with this key, or None. A None key returns None without touching storage."""
        if entity_id is None:
            return None

        async with db_error_handler(self.db, self.model_name):
            entity = await self.db.get(self.model, entity_id)

        logger.debug("repo.get.done", extra=self._log_extra("get", id=entity_id, found=entity is not None))
        return entity

    async def get_as(self, entity_id: int | None, result_type: type[R]) -> R:
        """
        The entity with this key projected to `result_type`.

        Raises:
            NotFoundError: key is None ("No Key Provided", no query issued) or no row matches.
        """
        if entity_id is None:
            raise NotFoundError(self.model_name, NO_KEY_PROVIDED)

        projection = self.mapper.projection(self.model, result_type)
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(projection.statement().where(self._pk == entity_id))
            items = projection.materialize(result)

        if not items:
            logger.info("repo.get_as.not_found", extra=self._log_extra("get_as", id=entity_id))
            raise NotFoundError(self.model_name, entity_id)
        return items[0]

    async def exists(self, entity_id: int) -> bool:
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                select(func.count()).select_from(self.model).where(self._pk == entity_id)
            )
            return result.scalar_one() > 0

    async def count(self) -> int:
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(select(func.count()).select_from(self.model))
            return result.scalar_one()

    # =================================================================================================================
    # Write Operations
    # =================================================================================================================

    async def add(self, entity: ModelType) -> ModelType:
        """Insert `entity`, commit, and return it with generated keys populated."""
        start = time.perf_counter()
        async with db_error_handler(self.db, self.model_name):
            self.db.add(entity)
            await self.db.commit()
            await self.db.refresh(entity)

        logger.info(
            "repo.add.success",
            extra=self._log_extra("add", id=getattr(entity, "id", None), duration_ms=_elapsed_ms(start)),
        )
        return entity

    async def add_from(self, source: Any, result_type: type[R]) -> R:
        """Map `source` to a new entity, insert it, and return it as `result_type`."""
        entity = self.mapper.map(source, self.model)
        entity = await self.add(entity)
        return self.mapper.map(entity, result_type)

    async def delete(self, entity_id: int) -> None:
        """
        Raises:
            NotFoundError: no row with this key.
        """
        start = time.perf_counter()
        entity = await self.get(entity_id)
        if entity is None:
            logger.info("repo.delete.not_found", extra=self._log_extra("delete", id=entity_id))
            raise NotFoundError(self.model_name, entity_id)

        async with db_error_handler(self.db, self.model_name):
            await self.db.delete(entity)
            await self.db.commit()

        logger.info(
            "repo.delete.success",
            extra=self._log_extra("delete", id=entity_id, duration_ms=_elapsed_ms(start)),
        )

    async def update(self, entity: ModelType) -> None:
        """
        Persist a (possibly detached) entity by merging it into the session.

        Only existing rows are updated; rows are created by `add`.

        Raises:
            NotFoundError: the entity has no key or no row with its key exists.
        """
        start = time.perf_counter()
        entity_id = getattr(entity, self._pk_attr, None)
        if entity_id is None or not await self.exists(entity_id):
            logger.info("repo.update.not_found", extra=self._log_extra("update", id=entity_id))
            raise NotFoundError(self.model_name, entity_id)

        async with db_error_handler(self.db, self.model_name):
            await self.db.merge(entity)
            await self.db.commit()

        logger.info(
            "repo.update.success",
            extra=self._log_extra("update", id=entity_id, duration_ms=_elapsed_ms(start)),
        )

    async def update_from(self, entity_id: int, source: Any) -> None:
        """
        Copy the members mapped from `source` onto the stored entity and commit.
        Attributes without a mapped counterpart keep their stored values.

        Raises:
            NotFoundError: no row with this key.
            BadRequestError: `source.id` is set and differs from `entity_id`.
        """
        start = time.perf_counter()
        entity = await self.get(entity_id)
        if entity is None:
            logger.info("repo.update_from.not_found", extra=self._log_extra("update_from", id=entity_id))
            raise NotFoundError(self.model_name, entity_id)

        source_id = getattr(source, "id", None)
        if source_id is not None and source_id != entity_id:
            logger.info(
                "repo.update_from.id_mismatch",
                extra=self._log_extra("update_from", id=entity_id, source_id=source_id),
            )
            raise BadRequestError(INVALID_ID_MESSAGE, fields=["id"])

        self.mapper.map_into(source, entity)
        async with db_error_handler(self.db, self.model_name):
            await self.db.commit()

        logger.info(
            "repo.update_from.success",
            extra=self._log_extra("update_from", id=entity_id, duration_ms=_elapsed_ms(start)),
        )
