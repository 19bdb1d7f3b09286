"""
Error taxonomy and the handlers that turn it into HTTP responses.

  InvalidInput   -> 400   missing or malformed request field
  Forbidden      -> 403   unknown token, or token owned by another user
  NotFound       -> 404   static entry document missing
  NotConfigured  -> 501   optional external provider not set up
  ProviderError  -> 500   upstream unreachable or returned non-JSON
  CorruptData    -> 500   a local JSON data file could not be read

Every error body is {"error": "<message>"}. 5xx bodies never carry the
underlying detail; it goes to the server log instead.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR = "server error"


class SereneError(Exception):
    status_code = 500

    def __init__(self, message: str = GENERIC_ERROR):
        super().__init__(message)
        self.message = message


class InvalidInput(SereneError):
    status_code = 400


class Forbidden(SereneError):
    status_code = 403


class NotFound(SereneError):
    status_code = 404


class NotConfigured(SereneError):
    status_code = 501


class ProviderError(SereneError):
    status_code = 500


class CorruptData(SereneError):
    status_code = 500


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SereneError)
    async def handle_serene_error(request: Request, exc: SereneError):
        if exc.status_code >= 500 and not isinstance(exc, NotConfigured):
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            return JSONResponse(status_code=exc.status_code, content={"error": GENERIC_ERROR})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "invalid request body"})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})
