"""
===============================================================================
MÓDULO: Envelope de respuesta de la API
===============================================================================

Todas las respuestas (éxito o error) comparten la forma:

    {"success": bool, "message": str, "data"?: any, "errors"?: [...], "code"?: str}

Register/login agregan `token` y los checks de disponibilidad agregan
`available`, por compatibilidad con el frontend existente.
===============================================================================
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class FieldErrorOut(BaseModel):
    field: str
    message: str


class Envelope(BaseModel):
    """Forma única de respuesta. Campos opcionales se omiten si son None."""

    model_config = ConfigDict(extra="allow")

    success: bool
    message: str
    data: Any | None = None
    errors: list[FieldErrorOut] | None = None
    code: str | None = None


def ok(
    message: str,
    data: Any | None = None,
    *,
    code: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Construye un envelope de éxito listo para serializar."""
    envelope = Envelope(success=True, message=message, data=data, code=code, **extra)
    body = envelope.model_dump(exclude_none=True, exclude={"data"}, by_alias=True)
    # `data` va tal cual: sus nulls (deleted_at, deleted_by) son parte del contrato.
    if data is not None:
        body["data"] = data
    return body


def fail(
    message: str,
    *,
    code: str | None = None,
    errors: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    """Construye un envelope de error listo para serializar."""
    envelope = Envelope(
        success=False,
        message=message,
        code=code,
        errors=[FieldErrorOut(**e) for e in errors] if errors else None,
    )
    return envelope.model_dump(exclude_none=True)
