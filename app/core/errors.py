"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``register_error_handlers`` renders every kind as
``{"error": message}`` with the status code carried by the class.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StoreError(Exception):
    status_code = 500
    default_message = "Error interno"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(StoreError):
    status_code = 400
    default_message = "Datos inválidos"


class NotFound(StoreError):
    status_code = 404
    default_message = "Producto no encontrado"


class InsufficientStock(StoreError):
    status_code = 400
    default_message = "Stock insuficiente"


class DuplicateKey(StoreError):
    status_code = 400
    default_message = "El código ya existe"


class InternalStoreError(StoreError):
    status_code = 500


def _error_response(error: StoreError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


def _field_name(loc) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def validation_message(errors) -> str:
    missing = []
    invalid = []
    for error in errors:
        name = _field_name(error.get("loc", ()))
        if error.get("type") == "missing":
            missing.append(name)
        else:
            invalid.append(name)
    if missing and not invalid:
        return "Faltan campos obligatorios: {}".format(", ".join(missing))
    fields = missing + invalid
    return "Datos incompletos o inválidos: {}".format(", ".join(fields))


async def _store_error_handler(_request: Request, exc: StoreError):
    return _error_response(exc)


async def _validation_error_handler(_request: Request, exc: RequestValidationError):
    return _error_response(BadRequest(validation_message(exc.errors())))


async def _http_error_handler(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    return _error_response(InternalStoreError(str(exc)))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, _store_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)


__all__ = [
    "BadRequest",
    "DuplicateKey",
    "InsufficientStock",
    "InternalStoreError",
    "NotFound",
    "StoreError",
    "register_error_handlers",
    "validation_message",
]
