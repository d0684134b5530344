"""
===============================================================================
TARJETA CRC — hotel_admin/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Elegir el adapter de persistencia de usuarios según Settings.
  - Exponer el repositorio como singleton (lru_cache) para FastAPI (Depends).

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories.UserRepository (puerto)
  - infrastructure.repositories.* (implementaciones)

Notas:
  - Sin lógica de negocio y sin dependencia de FastAPI.
  - Tests: `app.dependency_overrides[get_user_repository]` o `cache_clear()`.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .crosscutting.config import get_settings
from .domain.repositories import UserRepository
from .infrastructure.repositories import (
    InMemoryUserRepository,
    PostgresUserRepository,
)


def uses_memory_store() -> bool:
    """USER_STORE=memory, o app_env de test (test / testing / ci)."""
    settings = get_settings()
    return settings.user_store == "memory" or settings.is_test()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test / USER_STORE=memory; Postgres en runtime)."""
    if uses_memory_store():
        return InMemoryUserRepository()
    return PostgresUserRepository()
