"""Adapters de persistencia de usuarios."""

from .in_memory.user import InMemoryUserRepository
from .postgres.user import PostgresUserRepository

__all__ = ["InMemoryUserRepository", "PostgresUserRepository"]
