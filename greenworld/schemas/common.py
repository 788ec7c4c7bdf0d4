"""Shared schema base classes."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Integer columns are 32-bit on PostgreSQL
MAX_INT = 2**31 - 1


class CamelModel(BaseModel):
    """
    API models serialize with camelCase keys.

    Request bodies are accepted in either camelCase or snake_case.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str
