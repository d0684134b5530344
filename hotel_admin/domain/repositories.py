"""
===============================================================================
TARJETA CRC — domain/repositories.py
===============================================================================

Módulo:
    Puerto de persistencia de usuarios (UserRepository)

Responsabilidades:
    - Definir el contrato que cumplen los adapters (Postgres / in-memory).
    - Fijar la semántica de filtros activo/eliminado y de transiciones guardadas.

Colaboradores:
    - infrastructure/repositories/postgres/user.py
    - infrastructure/repositories/in_memory/user.py
    - application/usecases/users/*

Reglas del contrato:
    - Lecturas por defecto devuelven solo usuarios activos (active AND deleted_at IS NULL).
    - `include_deleted=True` amplía la búsqueda a todas las filas.
    - email_exists / cpf_exists consultan TODAS las filas (unicidad global).
    - soft_delete_user / restore_user son updates condicionales atómicos:
      devuelven None si la transición no ocurrió (no existe o ya estaba en ese estado).
    - Fallas del store => StoreError; colisión de unicidad => DuplicateUserError.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol
from uuid import UUID

from .entities import User

# Columnas actualizables vía update_user (nombres de atributo de User).
UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {"name", "email", "cpf", "phone", "address", "password_hash"}
)


class UserRepository(Protocol):
    """Contrato de persistencia de usuarios."""

    def create_user(
        self,
        *,
        name: str,
        email: str,
        cpf: str,
        phone: str,
        address: str,
        password_hash: str,
    ) -> User: ...

    def get_user_by_id(
        self, user_id: UUID, *, include_deleted: bool = False
    ) -> User | None: ...

    def get_user_by_email(
        self, email: str, *, include_deleted: bool = False
    ) -> User | None: ...

    def get_user_by_cpf(
        self, cpf: str, *, include_deleted: bool = False
    ) -> User | None: ...

    def email_exists(self, email: str, *, exclude_id: UUID | None = None) -> bool: ...

    def cpf_exists(self, cpf: str, *, exclude_id: UUID | None = None) -> bool: ...

    def list_users(
        self, *, active: bool, limit: int, offset: int
    ) -> tuple[list[User], int]: ...

    def update_user(
        self, user_id: UUID, changes: Mapping[str, Any]
    ) -> User | None: ...

    def soft_delete_user(self, user_id: UUID, *, deleted_by: UUID) -> User | None: ...

    def restore_user(self, user_id: UUID) -> User | None: ...

    def ping(self) -> bool: ...
