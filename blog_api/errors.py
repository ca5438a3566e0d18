from __future__ import annotations
from typing import Any, List, Optional


class BlogAPIError(Exception):
    """Base error carrying the HTTP status the API answers with."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_body(self) -> dict:
        body: dict = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(BlogAPIError):
    """Malformed or out-of-range input"""

    status_code = 400
    default_message = "Invalid input"


class NotFoundError(BlogAPIError):
    """Missing post / category / comment"""

    status_code = 404
    default_message = "Not found"


class ConflictError(BlogAPIError):
    """Unique constraint violated"""

    status_code = 409
    default_message = "Conflict"


class UpstreamError(BlogAPIError):
    """Storage unreachable or query failure not otherwise classified"""

    status_code = 500
    default_message = "Internal server error"


def field_error(field: str, msg: str, type_: str = "value_error") -> dict:
    # same shape as pydantic error entries so clients parse one format
    return {"loc": ["body", field], "msg": msg, "type": type_}
