import functools
from typing import Any, Awaitable, Callable

from fastapi import HTTPException, status
from starlette.responses import JSONResponse

from core.api_response import api_response
from core.exceptions import AppError
from core.logging_config import get_logger

logger = get_logger(__name__)


def exception_handler(
    func: Callable[..., Awaitable[Any]],
) -> Callable[..., Awaitable[Any]]:
    """
    Convert failures raised inside a route into structured error responses.

    HTTPException is left to the app-level handler.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except HTTPException:
            raise
        except AppError as exc:
            logger.warning(f"{func.__name__} failed: {exc.message}")
            return app_error_response(exc)
        except Exception as exc:
            logger.exception(f"Unhandled error in {func.__name__}: {exc}")
            return api_response(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message="Internal server error",
                log_error=True,
            )

    return wrapper


def app_error_response(exc: AppError) -> JSONResponse:
    return api_response(
        status_code=exc.status_code,
        message=exc.message,
        log_error=True,
    )
