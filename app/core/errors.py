import logging
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ValidationFailed(Exception):
    """Request body rejected by a schema; rendered as 400 with field errors."""

    def __init__(self, message: str, errors: list[dict]):
        super().__init__(message)
        self.message = message
        self.errors = errors


class ConflictError(Exception):
    """A unique field collided with an existing record."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def field_errors(exc: ValidationError | RequestValidationError) -> list[dict]:
    issues = []
    for err in exc.errors():
        issues.append({
            "path": [part for part in err.get("loc", ()) if part != "body"],
            "message": err.get("msg", "Invalid value"),
            "code": err.get("type", "invalid"),
        })
    return issues


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=400, content=jsonable_encoder({"message": exc.message, "errors": exc.errors}))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s rejected: malformed request", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"message": "Invalid request", "errors": field_errors(exc)}),
    )


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"message": exc.message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def register_exception_handlers(app) -> None:
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
