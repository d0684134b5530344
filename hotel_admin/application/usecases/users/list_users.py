"""
===============================================================================
USE CASE: List Users (activos / eliminados)
===============================================================================

Class:
    ListUsersUseCase

Responsibilities:
    - Página de usuarios activos (execute) o eliminados (execute_deleted).
    - Devolver el total exacto del filtro para calcular totalPages.

Notas:
    - Los parámetros llegan ya normalizados (PageParams); una página fuera de
      rango devuelve lista vacía con el total real.
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.pagination import PageParams
from ....domain.repositories import UserRepository
from .user_results import UserPageResult


class ListUsersUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, params: PageParams) -> UserPageResult:
        return self._page(params, active=True)

    def execute_deleted(self, params: PageParams) -> UserPageResult:
        return self._page(params, active=False)

    def _page(self, params: PageParams, *, active: bool) -> UserPageResult:
        users, total = self._users.list_users(
            active=active, limit=params.limit, offset=params.offset
        )
        return UserPageResult(users=users, total=total, params=params)
