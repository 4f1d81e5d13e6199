"""
Service-level exceptions.

Services raise these; the exception handlers registered in
``social_feed.main.create_app`` turn them into JSON error responses.
"""


class ServiceError(Exception):
    """Base class for errors that map onto a client-facing HTTP status."""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailedError(ServiceError):
    status_code = 400
    error_code = "VALIDATION_ERROR"


class DuplicateError(ValidationFailedError):
    error_code = "DUPLICATE"


class AuthenticationError(ServiceError):
    status_code = 401
    error_code = "UNAUTHORIZED"


class PermissionDeniedError(ServiceError):
    status_code = 403
    error_code = "FORBIDDEN"


class NotFoundError(ServiceError):
    status_code = 404
    error_code = "NOT_FOUND"
