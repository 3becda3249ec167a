from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import httpx
import logging

from domain.errors import (
    ConflictError,
    InvalidInputError,
    LLMNotConfiguredError,
    LLMResponseError,
    NotFoundError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (PermissionDeniedError, 403),
    (ConflictError, 409),
    (InvalidInputError, 400),
    (LLMNotConfiguredError, 503),
    (LLMResponseError, 502),
)


def attach_error_handlers(app: FastAPI) -> None:
    for exc_type, status_code in _STATUS_BY_ERROR:
        app.add_exception_handler(exc_type, _make_handler(status_code))

    @app.exception_handler(httpx.HTTPError)
    async def _gateway(request: Request, exc: httpx.HTTPError):
        logger.error("AI gateway call failed on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=502, content={"detail": "AI gateway error"})

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def _make_handler(status_code: int):
    async def _handler(request: Request, exc: Exception):
        if status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})
    return _handler
