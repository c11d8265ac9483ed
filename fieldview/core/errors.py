# File: /fieldview/core/errors.py | Version: 1.0 | Title: Engine error types + standardized error envelope
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

_CODE_MAP = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
    500: "INTERNAL_SERVER_ERROR",
}


def _err(code: int, message: str, details: Optional[List[Dict[str, Any]]] = None):
    body: Dict[str, Any] = {"code": _CODE_MAP.get(code, "ERROR"), "message": message}
    if details:
        body["details"] = details
    return {"error": body}


class ValidationError(ValueError):
    """
    Raised when a saved view (or one of its filter rules) fails validation.
    Nothing has been written to the store when this is raised.
    """

    status_code = 422

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError, what: str) -> "ValidationError":
        errors = [
            {
                "loc": ".".join(str(p) for p in e.get("loc", ())),
                "msg": e.get("msg", ""),
                "type": e.get("type", ""),
            }
            for e in exc.errors()
        ]
        return cls(f"Invalid {what}", errors)

    def to_dict(self) -> Dict[str, Any]:
        return _err(self.status_code, self.message, self.errors)


class FieldNotEditableError(ValueError):
    """Bulk edit was asked to write a derived (formula/rollup) field."""

    def __init__(self, field_id: Any, field_type: Any):
        super().__init__(f"Field {field_id} of type '{field_type}' is read-only")
        self.field_id = field_id
        self.field_type = field_type
