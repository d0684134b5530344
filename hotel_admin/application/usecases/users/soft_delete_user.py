"""
===============================================================================
USE CASE: Soft Delete User
===============================================================================

Business Goal:
    Desactivar un usuario sin borrarlo físicamente (auditoría + restauración).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    SoftDeleteUserUseCase

Responsibilities:
    - Ejecutar la transición ACTIVE -> DELETED como update condicional atómico.
    - Registrar quién eliminó (deleted_by) y cuándo (deleted_at).
    - Distinguir "no existe" de "ya estaba eliminado" cuando la transición
      no ocurre.

Collaborators:
    - UserRepository: soft_delete_user / get_user_by_id(include_deleted=True)

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
1) soft_delete_user(id, deleted_by) -> User => SUCCESS
2) None => get_user_by_id(id, include_deleted=True)
     - None     -> NOT_FOUND
     - inactivo -> USER_ALREADY_DELETED

Dos requests concurrentes sobre el mismo id: solo uno gana la transición.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from .user_results import UserErrorCode, UserResult, user_error


class SoftDeleteUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: UUID, *, deleted_by: UUID | None = None) -> UserResult:
        """`deleted_by` None => el propio usuario se elimina."""
        actor = deleted_by or user_id
        deleted = self._users.soft_delete_user(user_id, deleted_by=actor)
        if deleted is not None:
            logger.info(
                "Usuario eliminado (soft)",
                extra={"user_id": str(user_id), "deleted_by": str(actor)},
            )
            return UserResult(user=deleted)

        existing = self._users.get_user_by_id(user_id, include_deleted=True)
        if existing is None:
            return UserResult(error=user_error(UserErrorCode.NOT_FOUND))
        return UserResult(error=user_error(UserErrorCode.USER_ALREADY_DELETED))
