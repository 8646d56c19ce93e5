"""
Service-level errors.

Every failure a service can report is one of these classes. The API layer
renders them into the common response envelope, so services never deal with
HTTP details beyond the status code attached to each class.
"""

from typing import Any, Dict, List, Optional


class NewsDeskError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, data: Any = None):
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "status_code": self.status_code,
            "data": self.data,
        }


class ValidationFailure(NewsDeskError):
    status_code = 400
    default_message = "Validation failed"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailure":
        return cls(data=[{"field": field, "message": message}])

    @property
    def errors(self) -> List[Dict[str, str]]:
        return self.data or []


class Unauthorized(NewsDeskError):
    status_code = 401
    default_message = "Missing or invalid token"


class Forbidden(NewsDeskError):
    status_code = 403
    default_message = "You are not authorized to access this resource"


class NotFound(NewsDeskError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(NewsDeskError):
    status_code = 409
    default_message = "Resource conflict"


class PersistenceFailure(NewsDeskError):
    status_code = 500
    default_message = "Failed to save changes"
