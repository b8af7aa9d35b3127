from contextvars import ContextVar
from typing import Optional

from starlette.requests import Request

request_context: ContextVar[Optional[Request]] = ContextVar(
    "request_context", default=None
)


def current_request_path() -> Optional[str]:
    request = request_context.get()
    if request is None:
        return None
    return f"{request.method} {request.url.path}"
