# backend-server/app/core/exceptions.py
# Business errors raised by the services; main.py turns them into responses.
from fastapi import status


class HRServiceError(Exception):
    """Base class for errors that map onto a fixed HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(HRServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation error"


class ConflictError(HRServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflicting record"


class ForbiddenError(HRServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(HRServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InvalidStateError(HRServiceError):
    """A transition was attempted from a state that does not allow it."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid state for this operation"


class AlreadyInStateError(InvalidStateError):
    default_message = "Record is already in the requested state"


class AlreadyCancelledError(InvalidStateError):
    default_message = "Leave request is already cancelled"


class ForbiddenStateError(InvalidStateError):
    default_message = "Operation not allowed in the current state"


class PastDeadlineError(HRServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Deadline for this operation has passed"


class AuthenticationError(HRServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class UnexpectedError(HRServiceError):
    default_message = "Unexpected server error"
