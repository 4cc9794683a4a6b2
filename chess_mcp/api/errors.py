"""
Boundary translator: every failure leaves the API as {ok: false, error} with the status code of its ErrorKind.
"""

import logging

from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chess_mcp.api.models import ErrorResponse
from chess_mcp.core.exceptions import GameError
from chess_mcp.core.shared_types import ErrorKind

logger = logging.getLogger(__name__)

STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.GAME_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ILLEGAL_MOVE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_POSITION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL: status.HTTP_400_BAD_REQUEST,
}


def error_response(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_CODES[kind],
        content=ErrorResponse(error=message).model_dump(),
    )


def format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic's error list into one readable message, e.g. 'move: Field required'."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages) or "invalid_input"


async def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
    if exc.kind == ErrorKind.INTERNAL:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return error_response(exc.kind, str(exc) or exc.kind.value)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(ErrorKind.INVALID_INPUT, format_validation_errors(exc))


async def handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def catch_unhandled_errors(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    Last line of the boundary: anything that escaped the handlers above is still reported as {ok: false, error}.
    ----
    NOTE runs as middleware: Starlette re-raises after a handler registered for Exception.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("%s %s failed", request.method, request.url.path)
        return error_response(ErrorKind.INTERNAL, str(exc) or type(exc).__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.middleware("http")(catch_unhandled_errors)
    app.add_exception_handler(GameError, handle_game_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
