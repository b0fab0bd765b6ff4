"""Shared schema building blocks"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """
    JSON envelope returned by every item endpoint

    Only the keys that were set are rendered, so list endpoints carry
    ``count`` and search endpoints also echo ``query``.
    """

    success: bool = True
    data: Optional[T] = None
    count: Optional[int] = None
    query: Optional[str] = None
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Envelope used by the exception handlers"""

    success: bool = False
    error: str
    message: Optional[str] = None
    details: Optional[List[str]] = None
    detail: Optional[str] = None
