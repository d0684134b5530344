"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidad User (registro de la tabla `usuarios`)

Responsabilidades:
    - Definir el dataclass User utilizado por todos los casos de uso.
    - Exponer el estado del ciclo de vida (activo / soft-deleted).

Colaboradores:
    - infrastructure/repositories/*: mapean filas -> User.
    - application/usecases/users/*: operan sobre User.
    - api/schemas.py: convierte User -> DTO público (sin password_hash).

Invariantes:
    - active == True  <=>  deleted_at is None  <=>  deleted_by is None
    - password_hash nunca sale del backend.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class User:
    """Usuario del sistema hotelero (fila de `usuarios`)."""

    id: UUID
    name: str
    email: str
    cpf: str
    phone: str
    address: str
    password_hash: str
    created_at: datetime
    active: bool = True
    deleted_at: datetime | None = None
    deleted_by: UUID | None = None

    @property
    def is_deleted(self) -> bool:
        return not self.active

    def __repr__(self) -> str:
        # password_hash fuera del repr: los repr terminan en logs y tracebacks.
        return (
            f"User(id={self.id!s}, email={self.email!r}, active={self.active}, "
            f"deleted_at={self.deleted_at!r})"
        )
