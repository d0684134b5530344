"""
===============================================================================
USE CASE: Authenticate User (login)
===============================================================================

Class:
    AuthenticateUserUseCase

Responsibilities:
    - Buscar por email incluyendo cuentas eliminadas.
    - Verificar la senha ANTES de mirar el estado de la cuenta: una cuenta
      desactivada solo se revela a quien conoce la senha.
    - Email desconocido: verificar igual contra un hash descartable (mismo
      costo argon2, sin oráculo de tiempo para enumerar cuentas).
    - Re-hashear si los parámetros de argon2 cambiaron (best-effort).

Error Mapping:
    - email desconocido / senha incorrecta -> INVALID_CREDENTIALS
    - senha correcta + cuenta eliminada    -> ACCOUNT_DEACTIVATED
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import StoreError
from ....crosscutting.logger import logger
from ....domain.entities import User
from ....domain.repositories import UserRepository
from ....identity.passwords import (
    hash_password,
    needs_rehash,
    verify_dummy_password,
    verify_password,
)
from ...validation import LoginInput
from .user_results import UserErrorCode, UserResult, user_error


class AuthenticateUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, data: LoginInput) -> UserResult:
        user = self._users.get_user_by_email(data.email, include_deleted=True)
        if user is not None:
            valid = verify_password(data.password, user.password_hash)
        else:
            valid = verify_dummy_password(data.password)
        if not valid:
            logger.info("Login rechazado: credenciales inválidas")
            return UserResult(error=user_error(UserErrorCode.INVALID_CREDENTIALS))

        if not user.active:
            logger.info(
                "Login rechazado: cuenta desactivada",
                extra={"user_id": str(user.id)},
            )
            return UserResult(error=user_error(UserErrorCode.ACCOUNT_DEACTIVATED))

        if needs_rehash(user.password_hash):
            user = self._rehash(user, data.password)

        return UserResult(user=user)

    def _rehash(self, user: User, password: str) -> User:
        try:
            updated = self._users.update_user(
                user.id, {"password_hash": hash_password(password)}
            )
        except StoreError:
            # El login ya es válido; el rehash se reintenta en el próximo login.
            logger.warning(
                "No se pudo re-hashear la senha", extra={"user_id": str(user.id)}
            )
            return user
        return updated or user
