# contactbook/core/errors.py
"""
Error taxonomy for the API.
Every class is an HTTPException so FastAPI renders it directly as
{"detail": {"code": ..., "message": ...}} with the matching status code.
"""
from fastapi import HTTPException, status


class ApiError(HTTPException):
    """
    Base class for classified API errors.

    Subclasses set the HTTP status and a default code/message; callers may
    override both. ``errors`` carries per-field messages for validation failures.
    """
    status_code_default: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, code: str | None = None,
                 errors: dict[str, str] | None = None):
        detail = {"code": code or self.code, "message": message or self.message}
        if errors:
            detail["errors"] = errors
        super().__init__(status_code=self.status_code_default, detail=detail)


class ValidationError(ApiError):
    status_code_default = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    message = "Validation failed"


class Unauthorized(ApiError):
    status_code_default = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_REQUIRED"
    message = "missing"


class Forbidden(ApiError):
    status_code_default = status.HTTP_403_FORBIDDEN
    code = "AUTH_INVALID_TOKEN"
    message = "invalid_or_expired"


class NotFound(ApiError):
    status_code_default = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    message = "Not found"


class NotFoundOrDenied(NotFound):
    """Raised when a record is missing OR outside the caller's scope; the two are indistinguishable."""


class Conflict(ApiError):
    status_code_default = status.HTTP_409_CONFLICT
    code = "CONFLICT"
    message = "Conflict"


class InvalidOperation(ApiError):
    status_code_default = status.HTTP_400_BAD_REQUEST
    code = "INVALID_OPERATION"
    message = "Operation not allowed"


class PayloadTooLarge(ApiError):
    status_code_default = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    code = "PAYLOAD_TOO_LARGE"
    message = "Uploaded file is too large"


class UnsupportedMediaType(ApiError):
    status_code_default = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    code = "UNSUPPORTED_MEDIA_TYPE"
    message = "Only image uploads are accepted"
