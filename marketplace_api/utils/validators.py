"""
Input validation helpers shared by services and routers.
"""

from typing import Any
import uuid

from marketplace_api.utils.exceptions import InvalidRequestError


def parse_resource_id(value: Any, detail: str) -> uuid.UUID:
    """
    Parse a resource identifier from a path parameter.

    Args:
        value: Raw identifier (string or UUID)
        detail: Message used when the identifier is malformed

    Returns:
        Parsed UUID

    Raises:
        InvalidRequestError: If the identifier is not a well-formed UUID
    """
    if isinstance(value, uuid.UUID):
        return value

    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        raise InvalidRequestError(detail)

