from fastapi import status


class ServiceError(Exception):
    """Base class for errors that map onto a client-facing HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateReviewError(ValidationError):
    """The caller already reviewed this anime."""


class DuplicateEntryError(ValidationError):
    """A per-user library record for this anime already exists."""


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthorizationError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
