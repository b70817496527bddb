"""
Common/shared Pydantic schemas.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

# Strings that are trimmed on input (note bodies and passwords are not)
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]


# Base configuration for all schemas
class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    Fields are snake_case in Python and camelCase on the wire; requests
    may use either spelling.
    """

    model_config = ConfigDict(
        from_attributes=True,  # Allow ORM mode (SQLAlchemy objects)
        alias_generator=to_camel,
        populate_by_name=True,  # Allow population by field name or alias
        validate_assignment=True,  # Validate on assignment, not just creation
    )


class PageInfo(BaseSchema):
    """Page position of a paginated listing."""

    current: int = Field(..., description="Current page (1-based)")
    pages: int = Field(..., description="Total number of pages")
    total: int = Field(..., description="Total number of matching items")


# Standard response wrappers
class MessageResponse(BaseSchema):
    """Simple message response."""
    message: str
