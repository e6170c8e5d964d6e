"""Common pydantic base for all persisted and exchanged records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys.

    Instances can be built from either snake_case or camelCase input;
    ``to_record`` produces the persisted (camelCase) dict.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)
