"""
Uniform response envelope wrapping every API result.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope for every response body.
    success=True implies errors is None; success=False implies data is None.
    The HTTP status code is carried only by the transport.
    """

    success: bool = Field(..., description="Whether the request succeeded")
    message: str = Field(..., description="Human-readable outcome message")
    data: Optional[T] = Field(None, description="Result payload on success")
    errors: Optional[Any] = Field(None, description="Error details on failure")


def success_response(message: str, data: Any = None) -> ApiResponse:
    """Build a success envelope."""
    return ApiResponse(success=True, message=message, data=data, errors=None)


def error_body(message: str, errors: Any = None) -> Dict[str, Any]:
    """Build a JSON-ready failure envelope."""
    return {
        "success": False,
        "message": message,
        "data": None,
        "errors": errors if errors else None,
    }
