"""
===============================================================================
USE CASE: Search Users
===============================================================================

Class:
    SearchUsersUseCase

Responsibilities:
    - Filtrar por substring (case-insensitive) en nome o email.
    - El filtro se aplica SOLO sobre la página activa pedida; `total` cuenta
      las coincidencias de esa página (no del dataset completo).

Notas:
    - El query ya llega validado (>= 2 caracteres no vacíos).
    - Búsqueda sobre todo el dataset queda fuera de alcance.
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.pagination import PageParams
from ....domain.entities import User
from ....domain.repositories import UserRepository
from .user_results import UserPageResult


def matches(user: User, needle: str) -> bool:
    return needle in user.name.lower() or needle in user.email.lower()


class SearchUsersUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, query: str, params: PageParams) -> UserPageResult:
        users, _ = self._users.list_users(
            active=True, limit=params.limit, offset=params.offset
        )
        needle = query.strip().lower()
        found = [u for u in users if matches(u, needle)]
        return UserPageResult(
            users=found,
            total=len(found),
            params=params,
            query=query,
        )
