from fastapi import status


class MarketplaceError(Exception):
    """Base for errors the API boundary turns into a failure envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MarketplaceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class UnauthorizedError(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class MethodNotAllowedError(MarketplaceError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    default_message = "Method not allowed"


class ConflictError(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Request conflicts with the current state"


class StorageError(MarketplaceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "A database operation failed"


class ConfigurationError(Exception):
    """Programming error: the code asked for something that is not wired up."""
