"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / local dev sin DB).
  - Replicar la semántica del repo Postgres:
      - filtros activo/eliminado
      - unicidad de lower(email) y cpf (DuplicateUserError)
      - transiciones guardadas (soft delete / restore)
      - ORDER BY created_at DESC, id DESC

Collaborators:
  - domain.entities.User
  - domain.repositories.UserRepository (contrato a implementar)
  - crosscutting.exceptions.DuplicateUserError

Constraints / Notes:
  - Thread-safe: cada operación corre bajo Lock (check + write atómicos).
  - User es inmutable: los updates reemplazan la entidad con dataclasses.replace.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, Iterable, List, Mapping, Optional
from uuid import UUID, uuid4

from ....crosscutting.exceptions import DuplicateUserError
from ....domain.entities import User
from ....domain.repositories import UPDATABLE_FIELDS


class InMemoryUserRepository:
    """Repositorio in-memory, thread-safe, para usuarios."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _sorted(items: Iterable[User]) -> List[User]:
        return sorted(items, key=lambda u: (u.created_at, str(u.id)), reverse=True)

    @staticmethod
    def _is_active(u: User) -> bool:
        return u.active and u.deleted_at is None

    def _visible(self, u: User | None, include_deleted: bool) -> Optional[User]:
        if u is None:
            return None
        if not include_deleted and not self._is_active(u):
            return None
        return u

    def _check_unique_locked(
        self, *, email: str | None, cpf: str | None, exclude_id: UUID | None
    ) -> None:
        """Emula los índices únicos. Requiere tener el lock tomado."""
        for other in self._users.values():
            if other.id == exclude_id:
                continue
            if email is not None and other.email.lower() == email.lower():
                raise DuplicateUserError("email")
            if cpf is not None and other.cpf == cpf:
                raise DuplicateUserError("cpf")

    # =========================================================
    # Escritura
    # =========================================================
    def create_user(
        self,
        *,
        name: str,
        email: str,
        cpf: str,
        phone: str,
        address: str,
        password_hash: str,
    ) -> User:
        user = User(
            id=uuid4(),
            name=name,
            email=email,
            cpf=cpf,
            phone=phone,
            address=address,
            password_hash=password_hash,
            created_at=self._now(),
        )
        with self._lock:
            self._check_unique_locked(email=email, cpf=cpf, exclude_id=None)
            self._users[user.id] = user
        return user

    def update_user(self, user_id: UUID, changes: Mapping[str, Any]) -> Optional[User]:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Campos no actualizables: {sorted(unknown)}")
        with self._lock:
            current = self._users.get(user_id)
            if current is None or not self._is_active(current):
                return None
            if not changes:
                return current
            self._check_unique_locked(
                email=changes.get("email"),
                cpf=changes.get("cpf"),
                exclude_id=user_id,
            )
            updated = replace(current, **dict(changes))
            self._users[user_id] = updated
            return updated

    def soft_delete_user(self, user_id: UUID, *, deleted_by: UUID) -> Optional[User]:
        with self._lock:
            current = self._users.get(user_id)
            if current is None or not current.active:
                return None
            updated = replace(
                current, active=False, deleted_at=self._now(), deleted_by=deleted_by
            )
            self._users[user_id] = updated
            return updated

    def restore_user(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            current = self._users.get(user_id)
            if current is None or current.active:
                return None
            updated = replace(current, active=True, deleted_at=None, deleted_by=None)
            self._users[user_id] = updated
            return updated

    # =========================================================
    # Lectura
    # =========================================================
    def get_user_by_id(
        self, user_id: UUID, *, include_deleted: bool = False
    ) -> Optional[User]:
        with self._lock:
            return self._visible(self._users.get(user_id), include_deleted)

    def get_user_by_email(
        self, email: str, *, include_deleted: bool = False
    ) -> Optional[User]:
        target = email.lower()
        with self._lock:
            match = next(
                (u for u in self._users.values() if u.email.lower() == target), None
            )
            return self._visible(match, include_deleted)

    def get_user_by_cpf(
        self, cpf: str, *, include_deleted: bool = False
    ) -> Optional[User]:
        with self._lock:
            match = next((u for u in self._users.values() if u.cpf == cpf), None)
            return self._visible(match, include_deleted)

    def email_exists(self, email: str, *, exclude_id: UUID | None = None) -> bool:
        target = email.lower()
        with self._lock:
            return any(
                u.email.lower() == target and u.id != exclude_id
                for u in self._users.values()
            )

    def cpf_exists(self, cpf: str, *, exclude_id: UUID | None = None) -> bool:
        with self._lock:
            return any(
                u.cpf == cpf and u.id != exclude_id for u in self._users.values()
            )

    def list_users(
        self, *, active: bool, limit: int, offset: int
    ) -> tuple[list[User], int]:
        with self._lock:
            values = list(self._users.values())

        matching = self._sorted(u for u in values if self._is_active(u) == active)
        total = len(matching)
        if limit <= 0:
            return [], total
        offset = max(offset, 0)
        return matching[offset : offset + limit], total

    def ping(self) -> bool:
        return True
