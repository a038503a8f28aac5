"""
Error kinds raised by the repositories and mapped to HTTP statuses by
``api.errors``.

Hierarchy:
    TodoServiceError (base)
    ├── ValidationError      400
    ├── InvalidId            400
    ├── DuplicateEmail       400
    ├── InvalidCredentials   400
    ├── Unauthenticated      401
    └── NotFound             404
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import status


class TodoServiceError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(TodoServiceError):
    """A required field is missing, empty or malformed."""

    def __init__(self, field: str, message: str):
        super().__init__(message, {"field": field})
        self.field = field


class InvalidId(TodoServiceError):
    def __init__(self, value: str):
        super().__init__(f"'{value}' is not a valid id")
        self.value = value


class DuplicateEmail(TodoServiceError):
    def __init__(self, email: str):
        super().__init__("Email already registered", {"email": email})


class InvalidCredentials(TodoServiceError):
    def __init__(self):
        super().__init__("Invalid email or password")


class Unauthenticated(TodoServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, reason: str = "Authentication required"):
        super().__init__(reason)


class NotFound(TodoServiceError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"{resource} {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id
