"""
Exam Portal - Error Taxonomy
Domain exceptions raised by services and rendered as JSON by the app
"""
from fastapi import status


class PortalError(Exception):
    """Base error. Subclasses fix the HTTP status and default message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PortalError):
    """Malformed or out-of-range input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthorized(PortalError):
    """No credential was presented."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"


class Forbidden(PortalError):
    """Invalid credential or ownership violation."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class NoQuestionsAvailable(NotFound):
    default_message = "No questions available"


class AlreadyCompleted(PortalError):
    """Mutation attempted on an exam that has already been submitted."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Exam already completed"


class Conflict(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class InternalError(PortalError):
    pass
