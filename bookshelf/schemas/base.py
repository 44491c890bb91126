"""Shared schema configuration."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema exchanged as camelCase JSON but used with snake_case names in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
