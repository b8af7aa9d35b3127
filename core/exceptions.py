from typing import Optional

from fastapi import status


class AppError(Exception):
    """Base class for failures that are turned into a structured error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."


class ValidationRejectedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request rejected."


class StoreUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Data store is unavailable. Please try again later."
