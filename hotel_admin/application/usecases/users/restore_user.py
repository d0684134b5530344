"""
USE CASE: Restore User

Transición DELETED -> ACTIVE como update condicional (`WHERE NOT active`).
Limpia deleted_at / deleted_by y deja el resto de los campos intactos.
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from .user_results import UserErrorCode, UserResult, user_error


class RestoreUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: UUID) -> UserResult:
        restored = self._users.restore_user(user_id)
        if restored is not None:
            logger.info("Usuario restaurado", extra={"user_id": str(user_id)})
            return UserResult(user=restored)

        existing = self._users.get_user_by_id(user_id, include_deleted=True)
        if existing is None:
            return UserResult(error=user_error(UserErrorCode.NOT_FOUND))
        return UserResult(error=user_error(UserErrorCode.USER_ALREADY_ACTIVE))
