"""
===============================================================================
USE CASE: Update User (patch parcial)
===============================================================================

Class:
    UpdateUserUseCase

Responsibilities:
    - Verificar que el usuario exista y esté activo.
    - Verificar unicidad de email / cpf cuando cambian (excluyendo al propio usuario).
    - Re-hashear la senha si viene en el patch.
    - Aplicar solo los campos presentes.

Error Mapping:
    - usuario inexistente / eliminado -> NOT_FOUND
    - email de otro usuario           -> EMAIL_ALREADY_EXISTS
    - cpf de otro usuario             -> CPF_ALREADY_EXISTS
===============================================================================
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from ....crosscutting.exceptions import DuplicateUserError
from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.passwords import hash_password
from ...validation import UserUpdateInput
from .user_results import UserErrorCode, UserResult, user_error


class UpdateUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: UUID, data: UserUpdateInput) -> UserResult:
        current = self._users.get_user_by_id(user_id)
        if current is None:
            return UserResult(error=user_error(UserErrorCode.NOT_FOUND))

        fields = data.changes()

        email = fields.get("email")
        if email is not None and email != current.email.lower():
            if self._users.email_exists(email, exclude_id=user_id):
                return UserResult(error=user_error(UserErrorCode.EMAIL_ALREADY_EXISTS))

        cpf = fields.get("cpf")
        if cpf is not None and cpf != current.cpf:
            if self._users.cpf_exists(cpf, exclude_id=user_id):
                return UserResult(error=user_error(UserErrorCode.CPF_ALREADY_EXISTS))

        changes: dict[str, Any] = {k: v for k, v in fields.items() if k != "password"}
        if "password" in fields:
            changes["password_hash"] = hash_password(fields["password"])

        try:
            updated = self._users.update_user(user_id, changes)
        except DuplicateUserError as exc:
            code = (
                UserErrorCode.CPF_ALREADY_EXISTS
                if exc.field == "cpf"
                else UserErrorCode.EMAIL_ALREADY_EXISTS
            )
            return UserResult(error=user_error(code))

        if updated is None:
            # Eliminado entre la lectura y el update.
            return UserResult(error=user_error(UserErrorCode.NOT_FOUND))

        logger.info(
            "Usuario actualizado",
            extra={"user_id": str(user_id), "fields": sorted(changes)},
        )
        return UserResult(user=updated)
