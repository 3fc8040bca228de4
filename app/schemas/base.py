"""
Base Pydantic schemas with common fields.

These are templates that other schemas inherit from, plus the
response envelope every endpoint returns.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base schema for API bodies.

    Fields are snake_case in Python and camelCase on the wire;
    both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FieldError(BaseModel):
    """A single validation problem."""

    field: str
    message: str


class ApiResponse(BaseModel, Generic[T]):
    """
    Uniform response envelope.

    ``data`` is set on success, ``errors`` on validation failures.
    """

    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    errors: Optional[List[FieldError]] = None

    @classmethod
    def ok(cls, data: Optional[T] = None, message: Optional[str] = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, message=message)
