"""
Domain errors and their HTTP status codes.

Services raise these; the handlers registered in ``fintrack.main`` turn them
into ``{"error": message}`` responses. ``message`` is always safe to show to
the client, so internal details belong in the log, never in the message.
"""
from fastapi import status


class FintrackError(Exception):
    """Base class for errors that map to an HTTP response."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"

    def __init__(self, message: str = None, status_code: int = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(FintrackError):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    message = "All fields are required"


class CredentialsError(ValidationError):
    """Unknown email or wrong password on login."""
    message = "Invalid credentials"


class ConflictError(FintrackError):
    """A unique value (the email) is already taken."""
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class AuthError(FintrackError):
    """Missing (401) or invalid/expired (403) bearer token."""
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid or expired token."

    @classmethod
    def missing(cls) -> "AuthError":
        return cls("Access denied. No token provided.", status.HTTP_401_UNAUTHORIZED)


class NotFoundError(FintrackError):
    """Resource absent, or owned by someone else."""
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class StoreError(FintrackError):
    """Unexpected persistence failure."""
