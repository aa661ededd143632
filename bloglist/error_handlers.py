"""
Global exception handlers.

- ``BloglistError`` -> its own status with ``{"error", "kind"}``
- ``RequestValidationError`` -> 400 ``validation_error`` with field details
- ``Exception`` -> 500 ``internal_error``; internals are logged, not returned
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bloglist.errors import BloglistError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BloglistError, bloglist_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)


async def bloglist_error_handler(request: Request, exc: BloglistError) -> JSONResponse:
    logger.info("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.http_status == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.http_status, content=exc.to_response(), headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"] if loc != "body"),
            "message": e["msg"],
        }
        for e in exc.errors()
    ]
    message = "; ".join(f"{d['field']}: {d['message']}" for d in details) or "invalid request"
    logger.info("Validation error on %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "kind": "validation_error", "details": details},
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "an unexpected error occurred", "kind": "internal_error"},
    )
