"""USE CASE: Get User (solo activos)."""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import UserRepository
from .user_results import UserErrorCode, UserResult, user_error


class GetUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: UUID) -> UserResult:
        user = self._users.get_user_by_id(user_id)
        if user is None:
            return UserResult(error=user_error(UserErrorCode.NOT_FOUND))
        return UserResult(user=user)
