"""Exception handlers that turn errors reaching the app boundary into JSON.

Register with register_exception_handlers(app). Services already turn
remote-server failures into structured results; these handlers cover what
still escapes (admin auth, settings validation, framework errors, bugs).
Every body carries the request id so a client report can be matched to
the log line.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from talklink.core.config import get_settings
from talklink.domain.exceptions import TalkLinkException
from talklink.infrastructure.exceptions import TalkGatewayError
from talklink.shared.context import get_request_id

logger = logging.getLogger(__name__)

# error_code -> HTTP status; unknown codes answer 400
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "SETTINGS_READ_ONLY": 409,
    "NOT_CONFIGURED": 503,
    "REMOTE_TRANSPORT_ERROR": 502,
    "REMOTE_PROTOCOL_ERROR": 502,
}


def _json(status_code: int, body: dict[str, Any]) -> JSONResponse:
    request_id = get_request_id()
    if request_id:
        body = {**body, "requestId": request_id}
    return JSONResponse(status_code=status_code, content=body)


def _talk_link_exception_handler(request: Request, exc: TalkLinkException) -> JSONResponse:
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if isinstance(exc, TalkGatewayError):
        logger.warning("Remote server error on %s: %s", request.url.path, exc.message)
    return _json(status, exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _json(
        422,
        {
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _json(exc.status_code, {"error": "HTTP_ERROR", "message": exc.detail})


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is only exposed with DEBUG on."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message: Any = str(exc) if get_settings().debug else "Internal server error"
    return _json(500, {"error": "INTERNAL_ERROR", "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on app (TalkLinkException covers gateway errors too)."""
    app.add_exception_handler(TalkLinkException, _talk_link_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
