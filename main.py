from typing import Awaitable, Callable

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from api.v1.routes import api_router
from core.api_response import api_response
from core.config import settings
from core.exceptions import AppError
from core.lifespan import lifespan
from core.logging_config import get_logger, setup_logging
from core.request_context import request_context
from utils.exception_handlers import app_error_response
from utils.execution_time import ExecutionTimeMiddleware

setup_logging()

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        token = request_context.set(request)
        try:
            response = await call_next(request)
            logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
        finally:
            request_context.reset(token)
        response.headers["X-Method"] = request.method
        response.headers["X-Path"] = request.url.path
        return response


async def handle_http_exceptions(request: Request, exc: HTTPException) -> JSONResponse:
    return api_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        data={"path": request.url.path},
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_errors(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        f"Validation Error: {request.method} {request.url.path} - {len(details)} errors"
    )
    summary = "; ".join(f"{d['field']}: {d['message']}" for d in details)
    return api_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message=summary or "Invalid request.",
        data={"path": request.url.path, "details": details},
    )


async def handle_app_errors(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
    return app_error_response(exc)


def create_app() -> FastAPI:
    fastapi_app: FastAPI = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        lifespan=lifespan,
        debug=settings.ENVIRONMENT == "development",
        swagger_ui_parameters={
            "filter": True,
            "persistAuthorization": True,
            "docExpansion": "none",
            "displayRequestDuration": True,
        },
    )

    @fastapi_app.get("/", tags=["System"])
    async def root() -> dict[str, str]:
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.VERSION,
            "docs_url": "/docs",
            "redoc_url": "/redoc",
        }

    @fastapi_app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "message": "API is running fine!"}

    fastapi_app.include_router(api_router)

    fastapi_app.add_exception_handler(HTTPException, handle_http_exceptions)
    fastapi_app.add_exception_handler(RequestValidationError, handle_validation_errors)
    fastapi_app.add_exception_handler(AppError, handle_app_errors)

    logger.info(f"CORS Origins: {settings.CORS_ORIGINS}")
    fastapi_app.add_middleware(
        middleware_class=CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    fastapi_app.add_middleware(GZipMiddleware, minimum_size=1000)
    fastapi_app.add_middleware(ExecutionTimeMiddleware)
    fastapi_app.add_middleware(RequestLoggingMiddleware)

    return fastapi_app


app = create_app()


# Dev mode runner
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app="main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=True,
        use_colors=True,
    )
