"""Exceptions raised by the shortlinks core.

Every error carries the HTTP status the web layer answers with, so the
application needs a single handler for the whole hierarchy. None of them is
raised after a partial write: stores roll back before the error escapes.
"""

from fastapi import status


class ShortlinksError(Exception):
    """Base exception for all shortlinks errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class MissingField(ShortlinksError):
    """A required field was empty."""

    default_message = "Please fill out email and password"


class EmailAlreadyExists(ShortlinksError):
    default_message = "Email already exists"


class InvalidCredentials(ShortlinksError):
    """Unknown email or wrong password; the two cases are not distinguished."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Incorrect email or password"


class NotAuthenticated(ShortlinksError):
    """The request carries no valid session."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class NotOwner(ShortlinksError):
    """The session is valid but belongs to someone other than the owner."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not own this URL"


class NotFound(ShortlinksError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "URL not found"


class CapacityExhausted(ShortlinksError):
    """Could not find a free short code within the retry budget."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Could not allocate a short code"
