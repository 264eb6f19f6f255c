"""
Domain errors for the posts API.

Raised instead of HTTPException so the JSON body is a flat ``{key: message}``
or field-error mapping rather than ``{"detail": ...}``.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import ConnectionFailure, ExecutionTimeout, PyMongoError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base for errors rendered as ``{key: message}`` JSON bodies."""

    status_code = 500

    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key
        self.message = message

    def body(self) -> dict:
        return {self.key: self.message}


class Unauthorized(APIError):
    status_code = 401


class Forbidden(APIError):
    status_code = 403


class NotFound(APIError):
    status_code = 404


class Conflict(APIError):
    status_code = 409


class ServiceUnavailable(APIError):
    status_code = 503

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__("msg", message)


class PostValidationError(Exception):
    """Raised with the validator's field -> message mapping."""

    def __init__(self, errors: dict):
        super().__init__("Invalid post input")
        self.errors = errors


async def api_error_handler(request: Request, exc: APIError):
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def validation_error_handler(request: Request, exc: PostValidationError):
    return JSONResponse(status_code=400, content=exc.errors)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed or non-object bodies get the same 400 field-error shape as
    # validate_post_input, without echoing the raw input back
    errors = {}
    for error in exc.errors():
        fields = [part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"]
        errors.setdefault(fields[-1] if fields else "body", error.get("msg", "Invalid request"))
    return JSONResponse(status_code=400, content=errors)


async def storage_error_handler(request: Request, exc: PyMongoError):
    # Driver errors are logged here and never sent to the client
    if isinstance(exc, (ConnectionFailure, ExecutionTimeout)):
        logger.error("Storage unavailable on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=503, content=ServiceUnavailable().body())
    logger.exception("Storage error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"msg": "Internal server error"})


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(PostValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PyMongoError, storage_error_handler)
