# bookshelf/errors.py
"""
Error taxonomy and the handlers that turn failures into JSON responses.

Route handlers only raise; everything that reaches the client as an
error goes through ``install_error_handlers``. Every error body has
the shape ``{"error": <message>, "status": <code>}``, with an extra
``"stack"`` entry holding the formatted traceback when the application
runs in development mode.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings


logger = logging.getLogger(__name__)


class ApiError(Exception):
    status: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str = "", status: int = 0):
        self.message = message or self.default_message
        if status:
            self.status = status
        super().__init__(self.message)


class InvalidInput(ApiError):
    status = 400
    default_message = "Bad Request"


class NotFound(ApiError):
    status = 404
    default_message = "Not found"


class Internal(ApiError):
    status = 500
    default_message = "Internal Server Error"


def error_body(message: str, status: int, exc: BaseException, include_stack: bool) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"error": message, "status": status}
    if include_stack and exc.__traceback__ is not None:
        payload["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return payload


def install_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Register the JSON error handlers on ``app``.

    The catch-all ``Exception`` handler runs inside Starlette's
    server-error middleware, which only writes a response when none
    has started yet and re-raises the exception to the server
    afterwards.
    """
    include_stack = settings.is_development

    def _respond(request: Request, exc: BaseException, message: str, status: int) -> JSONResponse:
        if status >= 500:
            logger.error(
                "%s %s failed with %s",
                request.method,
                request.url.path,
                status,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
        else:
            logger.info("%s %s -> %s %s", request.method, request.url.path, status, message)
        return JSONResponse(
            status_code=status,
            content=error_body(message, status, exc, include_stack),
        )

    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        return _respond(request, exc, exc.message, exc.status)

    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # No route for this method/path pair, whether or not the path exists
        if exc.status_code in (404, 405):
            return _respond(request, exc, NotFound.default_message, NotFound.status)
        return _respond(request, exc, str(exc.detail), exc.status_code)

    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _respond(request, exc, InvalidInput.default_message, InvalidInput.status)

    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        return _respond(request, exc, str(exc) or Internal.default_message, Internal.status)

    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected)
