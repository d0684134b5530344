"""
===============================================================================
TARJETA CRC — api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación al envelope de error.
  - Centralizar logging de errores con request_id + error_id.
  - No filtrar detalles internos en errores no controlados.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> 500 INTERNAL_ERROR (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, handlers de framework
  - crosscutting.exceptions: StoreError
  - crosscutting.config.get_settings (nivel de detalle fuera de producción)
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..context import request_id_var
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    GENERIC_SERVER_MESSAGE,
    AppHTTPException,
    app_exception_handler,
    error_response,
    http_exception_handler,
    internal_error,
    request_validation_handler,
    store_error,
)
from ..crosscutting.exceptions import StoreError
from ..crosscutting.logger import logger


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Falla del store: 500 genérico, el detalle solo va al log."""
    logger.error(
        "Error de store",
        extra={
            "code": exc.error_code,
            "error_id": exc.error_id,
            "request_id": request_id_var.get(),
        },
    )
    return error_response(store_error())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica en producción.
    """
    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id_var.get(), "error": str(exc)},
    )
    detail = GENERIC_SERVER_MESSAGE if get_settings().is_production() else str(exc)
    return error_response(internal_error(detail or GENERIC_SERVER_MESSAGE))


def register_exception_handlers(app: FastAPI) -> None:
    """Exception genérica se registra al final como fallback."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
