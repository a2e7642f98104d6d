"""
Shared schema pieces: camelCase base model and the response envelopes
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope wrapping every response payload"""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Failure envelope"""
    success: bool = False
    message: str
    error: Optional[str] = None


# Documented on every router; the handlers in app.main produce these bodies
ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 403, 404, 409, 429, 500)
}


def error_response(message: str, error: Optional[str] = None) -> dict:
    return ErrorResponse(message=message, error=error).model_dump()
