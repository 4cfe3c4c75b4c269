"""House Plants error taxonomy.

Every service operation either returns normally or raises one of these.
The API layer maps each class to its status code and a response envelope.
"""

from fastapi import status


class HousePlantsError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(HousePlantsError):
    """Missing or invalid bearer credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(HousePlantsError):
    """Valid caller that does not own the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(HousePlantsError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ValidationError(HousePlantsError):
    """A required body field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Unable to parse request body, one or more properties improperly formatted"


class ConflictError(HousePlantsError):
    """Name already taken by another resource of the same owner."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Duplicate entry"


class StoreError(HousePlantsError):
    """The document store call failed.

    The message is always generic; the cause is kept on ``__cause__`` and logged.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
