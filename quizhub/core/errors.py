import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    status_code = 500
    code = "Internal"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidArgument(ServiceError):
    status_code = 400
    code = "InvalidArgument"


class Unauthorized(ServiceError):
    status_code = 401
    code = "Unauthorized"


class Forbidden(ServiceError):
    status_code = 403
    code = "Forbidden"


class NotFound(ServiceError):
    status_code = 404
    code = "NotFound"


class Internal(ServiceError):
    status_code = 500
    code = "Internal"


def _error_response(status: int, code: str, message: str, details: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"code": code, "message": message, "details": jsonable_encoder(details or {})},
    )


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            return _error_response(exc.status_code, exc.code, "Internal server error")
        return _error_response(exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        return _error_response(400, InvalidArgument.code, "Invalid request", {"errors": errors})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        details = {"error": str(exc)} if debug else None
        return _error_response(500, Internal.code, "Internal server error", details)
