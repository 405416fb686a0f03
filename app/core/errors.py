"""
Application Errors
==================

Error taxonomy shared by every layer. The API layer maps these to a
structured code + message (GraphQL extensions or a JSON body for REST).

Usage:
    from app.core.errors import NotFoundError

    if not student:
        raise NotFoundError("Student", student_id)
"""
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, code: str = "INTERNAL_SERVER_ERROR", status_code: int = 500):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "statusCode": self.status_code, "message": self.message}


class ValidationError(AppError):
    """Input failed validation. `fields` maps field name -> first violation message."""

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400)
        self.fields = fields or {}

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.fields:
            data["fields"] = self.fields
        return data


class NotFoundError(AppError):
    """Requested resource does not exist"""

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        if resource_id:
            message = f"{resource} with id {resource_id} not found"
        else:
            message = f"{resource} not found"
        super().__init__(message, code="NOT_FOUND", status_code=404)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(AppError):
    """Database operation failed; wraps the driver error"""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message, code="DATABASE_ERROR", status_code=500)
        self.original_error = original_error


class DatabaseConnectionError(AppError):
    """Database is unreachable (e.g. a paused Atlas cluster)"""

    DEFAULT_MESSAGE = (
        "Cannot connect to MongoDB. If you're using MongoDB Atlas M0 (free tier), "
        "the cluster may be paused after inactivity. Please wait 10-30 seconds "
        "for it to wake up, then try again."
    )

    def __init__(self, message: Optional[str] = None, original_error: Optional[BaseException] = None):
        super().__init__(message or self.DEFAULT_MESSAGE, code="DATABASE_CONNECTION_ERROR", status_code=503)
        self.original_error = original_error


class ConfigurationError(AppError):
    """Missing or invalid environment configuration"""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIGURATION_ERROR", status_code=500)
