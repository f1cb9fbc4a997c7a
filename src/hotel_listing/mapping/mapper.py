"""
Representation mapper.

A `Mapper` holds one `TypeMap` per (source type, destination type) pair. Maps
are declared once at startup (see `profile.build_mapper`) and the registry is
read-only afterwards, so a single instance is shared by every request.

Members of a map are derived, not listed by hand:
  - destination is a pydantic model  -> its declared fields
  - destination is an ORM entity     -> its column attributes minus primary keys
intersected with the attributes the source exposes. Relationship attributes on
an entity source whose destination field holds another model (or a list of
them) become *nested* members and are mapped recursively.

Besides object-to-object mapping, the mapper can describe how to read a
representation straight from storage (`projection`): flat representations
select only the mapped columns; representations with nested members select the
entity with the relationships eager-joined in the same statement.
"""

import logging
import typing
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, inspect as sa_inspect, select
from sqlalchemy.engine import Result
from sqlalchemy.orm import joinedload

logger = logging.getLogger(__name__)

R = TypeVar("R")


class MappingError(Exception):
    """No map is registered for a requested (source, destination) pair."""

    def __init__(self, source: type, destination: type):
        super().__init__(f"No map registered from {source.__name__} to {destination.__name__}")
        self.source = source
        self.destination = destination


@dataclass(frozen=True)
class TypeMap:
    source: type
    destination: type
    members: tuple[str, ...]
    # member name -> destination type of each nested element
    nested: dict[str, type] = field(default_factory=dict)

    @property
    def flat_members(self) -> tuple[str, ...]:
        return tuple(m for m in self.members if m not in self.nested)


def _orm_mapper(cls: type):
    return sa_inspect(cls, raiseerr=False)


def _is_model(cls: Any) -> bool:
    try:
        return isinstance(cls, type) and issubclass(cls, BaseModel)
    except TypeError:
        # parameterized generics such as list[HotelDto]
        return False


def _source_attributes(source: type) -> set[str]:
    if _is_model(source):
        return set(source.model_fields)
    orm = _orm_mapper(source)
    if orm is not None:
        return set(orm.attrs.keys())
    return {name for name in dir(source) if not name.startswith("_")}


def _destination_members(destination: type) -> list[str]:
    if _is_model(destination):
        return list(destination.model_fields)
    orm = _orm_mapper(destination)
    if orm is None:
        raise TypeError(f"{destination.__name__} is neither a pydantic model nor a mapped entity")
    return [
        prop.key
        for prop in orm.column_attrs
        if not any(getattr(col, "primary_key", False) for col in prop.columns)
    ]


def _element_type(annotation: Any) -> type | None:
    """list[HotelDto] -> HotelDto, HotelDto | None -> HotelDto, int -> None."""
    if _is_model(annotation):
        return annotation
    for arg in typing.get_args(annotation):
        found = _element_type(arg)
        if found is not None:
            return found
    return None


class Projection(Generic[R]):
    """Statement builder plus row materializer for reading `result_type` from `entity`."""

    def __init__(self, mapper: "Mapper", entity: type, type_map: TypeMap):
        self._mapper = mapper
        self.entity = entity
        self.type_map = type_map
        columns = set(_orm_mapper(entity).column_attrs.keys())
        # column projection only works when every member is a plain column
        self.column_only = not type_map.nested and all(m in columns for m in type_map.members)

    @property
    def result_type(self) -> type:
        return self.type_map.destination

    def statement(self) -> Select:
        if self.column_only:
            return select(*(getattr(self.entity, m).label(m) for m in self.type_map.members))

        options = [joinedload(getattr(self.entity, m)) for m in self.type_map.nested]
        return (
            select(self.entity)
            .options(*options)
            # identity-map hits may hold unloaded collections; refresh them from this row set
            .execution_options(populate_existing=True)
        )

    def materialize(self, result: Result) -> list[R]:
        if self.column_only:
            return [self.result_type.model_validate(dict(row._mapping)) for row in result]
        return [self._mapper.map(entity, self.result_type) for entity in result.unique().scalars().all()]


class Mapper:
    def __init__(self):
        self._maps: dict[tuple[type, type], TypeMap] = {}

    def create_map(
        self,
        source: type,
        destination: type,
        *,
        ignore: Iterable[str] = (),
        reverse: bool = False,
    ) -> TypeMap:
        """
        Register a map from `source` to `destination`.

        Args:
            ignore: destination members to leave untouched.
            reverse: also register `destination -> source` with the same ignores.
        """
        ignored = set(ignore)
        available = _source_attributes(source)
        members = [m for m in _destination_members(destination) if m in available and m not in ignored]

        nested: dict[str, type] = {}
        source_orm = _orm_mapper(source)
        if _is_model(destination) and source_orm is not None:
            relationships = set(source_orm.relationships.keys())
            for member in members:
                if member in relationships:
                    element = _element_type(destination.model_fields[member].annotation)
                    if element is None:
                        raise TypeError(
                            f"{destination.__name__}.{member} must hold a model to map relationship "
                            f"{source.__name__}.{member}"
                        )
                    nested[member] = element

        type_map = TypeMap(source, destination, tuple(members), nested)
        self._maps[(source, destination)] = type_map
        logger.debug(
            "mapper.create_map",
            extra={"source": source.__name__, "destination": destination.__name__, "members": members},
        )

        if reverse:
            self.create_map(destination, source, ignore=ignored)
        return type_map

    def has_map(self, source: type, destination: type) -> bool:
        try:
            self.find_map(source, destination)
        except MappingError:
            return False
        return True

    def find_map(self, source: type, destination: type) -> TypeMap:
        for candidate in source.__mro__:
            type_map = self._maps.get((candidate, destination))
            if type_map is not None:
                return type_map
        raise MappingError(source, destination)

    def map(self, obj: Any, destination: type[R]) -> R:
        """Build a new `destination` instance from `obj`."""
        type_map = self.find_map(type(obj), destination)
        data = {m: getattr(obj, m) for m in type_map.flat_members}

        for member, element_type in type_map.nested.items():
            value = getattr(obj, member)
            if value is None:
                data[member] = None
            elif isinstance(value, (list, tuple, set)):
                data[member] = [self.map(item, element_type) for item in value]
            else:
                data[member] = self.map(value, element_type)

        if _is_model(destination):
            return destination.model_validate(data)
        return destination(**data)

    def map_into(self, obj: Any, target: R) -> R:
        """Copy the mapped members of `obj` onto an existing `target`; other attributes are left as they are."""
        type_map = self.find_map(type(obj), type(target))
        for member in type_map.flat_members:
            setattr(target, member, getattr(obj, member))
        return target

    def projection(self, entity: type, result_type: type[R]) -> Projection[R]:
        return Projection(self, entity, self.find_map(entity, result_type))
