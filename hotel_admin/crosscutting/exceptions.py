# hotel_admin/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  HotelAdminError + subclases

Responsabilidades:
  - Estandarizar errores de infraestructura que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - infrastructure/repositories/* (lanzan StoreError / DuplicateUserError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class HotelAdminError(Exception):
    """Base para errores internos del sistema (error_code + error_id + message)."""

    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class StoreError(HotelAdminError):
    """Falla del store de datos (conexión, query, timeout, pool). No se reintenta."""

    error_code: str = "STORE_ERROR"


class DuplicateUserError(StoreError):
    """
    El store rechazó un INSERT/UPDATE por constraint de unicidad.

    `field` indica qué columna colisionó ("email" | "cpf"). Es la autoridad
    final de unicidad cuando dos requests pasan el pre-check a la vez.
    """

    error_code: str = "DUPLICATE_USER"

    def __init__(self, field: str, message: str | None = None, **kwargs):
        self.field = field
        super().__init__(message or f"Duplicate value for {field}", **kwargs)
