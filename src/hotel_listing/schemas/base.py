from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base class for every transfer representation.

    - Python side uses snake_case field names (matching ORM attribute names,
      which is what the Mapper pairs on).
    - Wire side uses camelCase aliases (`shortName`, `countryId`, ...).
    - `populate_by_name` lets the Mapper build instances from attribute names.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )
