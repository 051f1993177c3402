"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; app.main renders them as
{"error": message}. Routers never build error responses by hand.
"""


class CRMError(Exception):
    """Base class for errors that are safe to show to the caller."""

    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(CRMError):
    status_code = 400
    default_message = "Validation failed"


class DependentRecordsExist(ValidationError):
    """Delete blocked because other records still reference this one."""
    default_message = "Record has dependent records"


class DuplicateEmail(CRMError):
    status_code = 400
    default_message = "User already exists with this email"


class InvalidCredentials(CRMError):
    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(CRMError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(CRMError):
    status_code = 403
    default_message = "Not authorized for this action"


class NotFound(CRMError):
    status_code = 404
    default_message = "Not found"


class ReferenceNotFound(NotFound):
    """A foreign key in the request body points at a missing record."""
    status_code = 400


class InvalidOrExpiredToken(CRMError):
    status_code = 400
    default_message = "Invalid or expired reset token"


class PasswordMismatch(CRMError):
    status_code = 400
    default_message = "Password confirmation does not match password"


class Internal(CRMError):
    status_code = 500
    default_message = "Internal server error"
