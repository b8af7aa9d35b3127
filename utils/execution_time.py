# Standard Library Imports
import inspect
import functools
import time
from typing import Any, Callable

# Third-Party Library Imports
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

# Application-Specific Imports
from core.logging_config import get_logger

logger = get_logger(__name__)


class ExecutionTimeMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Any:
        """Middleware to add execution time to the response headers."""
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start_time
        response.headers["API-Execution-Time"] = f"{elapsed:.4f} seconds"
        return response


def measure_execution_time(func: Callable[..., Any]) -> Callable[..., Any]:
    """Log how long a sync or async function takes."""

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                logger.info(
                    f"{func.__name__} executed in {time.perf_counter() - start_time:.4f} seconds"
                )

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            logger.info(
                f"{func.__name__} executed in {time.perf_counter() - start_time:.4f} seconds"
            )

    return wrapper
