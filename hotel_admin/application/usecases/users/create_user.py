"""
===============================================================================
USE CASE: Create User (register / admin create)
===============================================================================

Business Goal:
    Dar de alta un usuario con email y CPF únicos, guardando solo el hash de la
    senha.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateUserUseCase

Responsibilities:
    - Pre-check de unicidad sobre TODAS las filas (también eliminadas):
      email primero, luego cpf.
    - Hashear la senha (argon2).
    - Persistir y devolver el usuario creado.
    - Traducir DuplicateUserError del store (carrera entre check e insert)
      al mismo código de conflicto.

Collaborators:
    - UserRepository: email_exists / cpf_exists / create_user
    - identity.passwords.hash_password
    - user_results: UserResult / UserErrorCode

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
1) email_exists(email) -> EMAIL_ALREADY_EXISTS
2) cpf_exists(cpf)     -> CPF_ALREADY_EXISTS
3) hash_password(senha)
4) create_user(...)    -> DuplicateUserError => conflicto del campo que colisionó
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import DuplicateUserError
from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.passwords import hash_password
from ...validation import UserCreateInput
from .user_results import UserErrorCode, UserResult, user_error

_CONFLICT_FOR_FIELD: dict[str, UserErrorCode] = {
    "email": UserErrorCode.EMAIL_ALREADY_EXISTS,
    "cpf": UserErrorCode.CPF_ALREADY_EXISTS,
}


class CreateUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, data: UserCreateInput) -> UserResult:
        if self._users.email_exists(data.email):
            return UserResult(error=user_error(UserErrorCode.EMAIL_ALREADY_EXISTS))
        if self._users.cpf_exists(data.cpf):
            return UserResult(error=user_error(UserErrorCode.CPF_ALREADY_EXISTS))

        try:
            user = self._users.create_user(
                name=data.name,
                email=data.email,
                cpf=data.cpf,
                phone=data.phone,
                address=data.address,
                password_hash=hash_password(data.password),
            )
        except DuplicateUserError as exc:
            # Otro request insertó el mismo email/cpf entre el check y el insert.
            return UserResult(
                error=user_error(
                    _CONFLICT_FOR_FIELD.get(exc.field, UserErrorCode.EMAIL_ALREADY_EXISTS)
                )
            )

        logger.info("Usuario creado", extra={"user_id": str(user.id)})
        return UserResult(user=user)
