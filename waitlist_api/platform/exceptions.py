import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from waitlist_api.platform.response import api_response

logger = logging.getLogger(__name__)


class WaitlistError(Exception):
    """Base class for errors that map onto an API response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(WaitlistError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidEmailError(InvalidInputError):
    default_message = "Please provide a valid email address"


class DuplicateEmailError(WaitlistError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "This email is already on our waitlist!"


class EntryNotFoundError(WaitlistError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Entry not found"


class StorageError(WaitlistError):
    default_message = "Internal server error. Please try again later."


def add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(WaitlistError)
    async def waitlist_exception_handler(request: Request, exc: WaitlistError):
        return api_response(message=exc.message, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # A known path with an unsupported method is just another unmatched route.
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return api_response(
                message="API endpoint not found", status_code=status.HTTP_404_NOT_FOUND
            )
        return api_response(message=str(exc.detail) or "Error", status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return api_response(
            message="Validation failed",
            status_code=status.HTTP_400_BAD_REQUEST,
            data={"errors": exc.errors()},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return api_response(
            message="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
