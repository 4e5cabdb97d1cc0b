"""Common schema building blocks.

The wire format is camelCase (``usernameOrEmail``, ``pageSize``); Python
attributes stay snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases.

    Accepts both alias and field names on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(CamelModel):
    """Plain acknowledgement."""

    message: str = Field(..., description="Human-readable message")
