from .mapper import Mapper, MappingError, Projection, TypeMap
from .profile import build_mapper

__all__ = ["Mapper", "MappingError", "Projection", "TypeMap", "build_mapper"]
