import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


def api_response(
    status_code: int,
    message: str,
    data: Optional[Any] = None,
    log_error: bool = False,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """
    Build the JSON body every endpoint returns.

    Successful responses carry ``success: true`` and merge a dict payload into
    the top level (``{"success": true, "post": {...}}``); any other payload is
    placed under ``data``. Failures carry ``success: false`` and ``error``.
    """
    is_success = status_code < 400
    content: dict[str, Any] = {
        "success": is_success,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if not is_success:
        content["error"] = message

    if data is not None:
        encoded = jsonable_encoder(data, by_alias=True)
        if isinstance(encoded, dict):
            content.update(encoded)
        else:
            content["data"] = encoded

    log_message = f"API Response - Code: {status_code}, Message: {message}"
    if log_error or not is_success:
        logger.error(log_message)
    else:
        logger.info(log_message)

    return JSONResponse(status_code=status_code, content=content, headers=headers)
