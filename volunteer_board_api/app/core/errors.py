"""
Domain errors raised by the service layer.

Services never build HTTP responses themselves.  They raise one of the
exceptions below and the routers translate them into ``HTTPException``
with the matching ``status_code``.
"""

from fastapi import status


class VolunteerBoardError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(VolunteerBoardError):
    """Malformed or mismatched input, rejected before any store mutation."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(VolunteerBoardError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(VolunteerBoardError):
    """The request is well formed but the current state forbids it."""

    status_code = status.HTTP_409_CONFLICT


class StoreError(VolunteerBoardError):
    """The database rejected or failed an operation."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
