"""Global error handlers: every failure becomes {"kind", "detail"} JSON."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from cyberquest.errors import AppError, StorageError

logger = structlog.get_logger()


def _field_name(loc: tuple[object, ...]) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI puts on every location.
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Domain errors carry their own kind and status."""
        if exc.status_code >= 500:
            logger.error("app_error", path=request.url.path, kind=exc.kind, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"kind": "http_error", "detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed payloads are rejected as a whole, naming each bad field."""
        errors = exc.errors()
        fields = sorted({_field_name(tuple(err.get("loc", ()))) for err in errors})
        return JSONResponse(
            status_code=422,
            content={
                "kind": "validation_error",
                "detail": "Invalid request: " + ", ".join(fields),
                "fields": fields,
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Database failures are logged in full and reported generically."""
        logger.error(
            "storage_error",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        err = StorageError()
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions, always JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"kind": "internal_error", "detail": "Internal server error"},
        )
