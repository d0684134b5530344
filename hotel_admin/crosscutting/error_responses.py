# hotel_admin/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Respuestas de error estándar (envelope {success, message, code, errors})
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que:
- El frontend pueda manejar por "code"
- Los errores de validación lleguen con detalle por campo
- Nunca se filtren detalles internos del store

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + handlers

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Proveer factories de errores frecuentes
  - Proveer handlers (FastAPI) que renderizan el envelope

Colaboradores:
  - crosscutting/envelope.py (forma del JSON)
  - api/exception_handlers.py (mapea errores internos y registra handlers)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .envelope import Envelope, fail

GENERIC_VALIDATION_MESSAGE = "Dados de entrada inválidos"
GENERIC_SERVER_MESSAGE = "Erro interno do servidor"


class ErrorCode(str, Enum):
    # 400
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"
    # 401
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    INVALID_TOKEN = "INVALID_TOKEN"
    # 404 / 405
    USER_NOT_FOUND = "USER_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    # 409
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    CPF_ALREADY_EXISTS = "CPF_ALREADY_EXISTS"
    USER_ALREADY_ACTIVE = "USER_ALREADY_ACTIVE"
    USER_ALREADY_DELETED = "USER_ALREADY_DELETED"
    # 413
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    # 5xx
    STORE_ERROR = "STORE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_OPENAPI_ERROR_CONTENT = {
    "application/json": {"schema": {"$ref": "#/components/schemas/Envelope"}}
}

OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"description": "Bad Request", "model": Envelope},
    401: {"description": "Unauthorized", "model": Envelope},
    404: {"description": "Not Found", "model": Envelope},
    409: {"description": "Conflict", "model": Envelope},
    "default": {
        "description": "Error",
        "model": Envelope,
        "content": _OPENAPI_ERROR_CONTENT,
    },
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un ErrorCode estable
      - Transportar errores de validación (errors[] con field/message)

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, str]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(
    detail: str = GENERIC_VALIDATION_MESSAGE,
    errors: list[dict[str, str]] | None = None,
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def invalid_id(detail: str = "ID deve ser um UUID válido") -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.INVALID_ID, detail)


def not_found(detail: str = "Usuário não encontrado") -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.USER_NOT_FOUND, detail)


def conflict(code: ErrorCode, detail: str) -> AppHTTPException:
    return AppHTTPException(409, code, detail)


def unauthorized(
    code: ErrorCode = ErrorCode.INVALID_CREDENTIALS,
    detail: str = "Email ou senha incorretos",
) -> AppHTTPException:
    return AppHTTPException(401, code, detail)


def payload_too_large(max_bytes: int) -> AppHTTPException:
    return AppHTTPException(
        413,
        ErrorCode.PAYLOAD_TOO_LARGE,
        f"Corpo da requisição excede o máximo permitido ({max_bytes} bytes)",
    )


def store_error(detail: str = GENERIC_SERVER_MESSAGE) -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.STORE_ERROR, detail)


def internal_error(detail: str = GENERIC_SERVER_MESSAGE) -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
def error_response(exc: AppHTTPException) -> JSONResponse:
    """Renderiza una AppHTTPException como envelope JSON."""
    return JSONResponse(
        status_code=exc.status_code,
        content=fail(str(exc.detail), code=exc.code.value, errors=exc.errors),
        headers=getattr(exc, "headers", None),
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    return error_response(exc)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Errores HTTP del framework (ruta inexistente, método no permitido).

    Se reescriben al envelope para que el cliente vea una sola forma de error.
    """
    if exc.status_code == 404:
        code, detail = ErrorCode.NOT_FOUND, "Rota não encontrada"
    elif exc.status_code == 405:
        code, detail = ErrorCode.METHOD_NOT_ALLOWED, "Método não permitido"
    else:
        code, detail = ErrorCode.INTERNAL_ERROR, str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=fail(detail, code=code.value),
        headers=getattr(exc, "headers", None),
    )


def _field_from_loc(loc: tuple[Any, ...]) -> str:
    # loc = ("body", "email") | ("query", "page") | ("body",)
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Errores de parsing de FastAPI (JSON inválido, tipos) -> 400 con detalle."""
    errors = [
        {"field": _field_from_loc(tuple(err.get("loc", ()))), "message": err["msg"]}
        for err in exc.errors()
    ]
    return error_response(validation_error(errors=errors))
