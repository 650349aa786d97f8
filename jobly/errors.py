"""Error taxonomy and the handlers that translate it into HTTP responses.

Every failure leaves the API as ``{"error": {"message": ..., "status": ...}}``.
Services raise the typed errors below; schema failures from FastAPI arrive
as ``RequestValidationError`` and are reported as 400 with one message per
problem.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("jobly")


class JoblyError(Exception):
    status = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | list[str] | None = None, status: int | None = None):
        if status is not None:
            self.status = status
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class BadRequestError(JoblyError):
    status = 400
    default_message = "Bad Request"


class UnauthorizedError(JoblyError):
    status = 401
    default_message = "Unauthorized"


class NotFoundError(JoblyError):
    status = 404
    default_message = "Not Found"


def error_response(message: str | list[str], status: int) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": {"message": message, "status": status}},
    )


def _format_validation_error(err: dict) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    return f"{loc}: {err['msg']}" if loc else err["msg"]


async def jobly_error_handler(request: Request, exc: JoblyError):
    return error_response(exc.message, exc.status)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response([_format_validation_error(e) for e in exc.errors()], 400)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.detail, exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    # DBAPI errors wrapped by SQLAlchemy keep the driver message on .orig
    message = str(getattr(exc, "orig", None) or exc) or "Internal Server Error"
    return error_response(message, 500)


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(JoblyError, jobly_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
