"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Implementar UserRepository sobre la tabla `usuarios` (Supabase/Postgres).
  - Ejecutar SQL parametrizado (nunca interpolar input de usuario).
  - Mapear filas crudas -> entidad de dominio `User`.
  - Transiciones guardadas (soft delete / restore) como UPDATE condicional atómico.
  - Traducir violaciones de unicidad -> DuplicateUserError(field).
  - Exponer fallos consistentes vía StoreError con logging estructurado.

Collaborators:
  - psycopg_pool.ConnectionPool (inyectable; por defecto el pool global)
  - domain.entities.User
  - crosscutting.exceptions.StoreError / DuplicateUserError
  - crosscutting.logger.logger

Constraints / Notes:
  - Retorna None cuando no existe el recurso (no exception por "not found").
  - Email se compara por lower(email) (índice único funcional en la migración).
  - Orden estable en listados: created_at DESC, id_usuario DESC.
  - No loguear hashes ni emails completos.
============================================================
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional
from uuid import UUID, uuid4

from psycopg.errors import UniqueViolation
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DuplicateUserError, StoreError
from ....crosscutting.logger import logger
from ....domain.entities import User
from ....domain.repositories import UPDATABLE_FIELDS

# ============================================================
# Contrato de SQL (alineado con alembic/versions/001_usuarios.py)
# ============================================================
_TABLE = "usuarios"

_USER_COLUMNS = (
    "id_usuario, nome, email, cpf, telefone, endereco, senha, "
    "created_at, active, deleted_at, deleted_by"
)

_USER_ORDER_BY = "created_at DESC, id_usuario DESC"

_ACTIVE_FILTER = "active AND deleted_at IS NULL"
_DELETED_FILTER = "NOT active"

# Atributo de dominio -> columna.
_COLUMN_FOR: dict[str, str] = {
    "name": "nome",
    "email": "email",
    "cpf": "cpf",
    "phone": "telefone",
    "address": "endereco",
    "password_hash": "senha",
}

# Nombre de constraint/índice único -> campo reportado.
_UNIQUE_CONSTRAINTS: dict[str, str] = {
    "uq_usuarios_email_lower": "email",
    "uq_usuarios_cpf": "cpf",
}


# ============================================================
# Helpers internos: mapping + ejecución
# ============================================================
def _row_to_user(row: tuple) -> User:
    return User(
        id=row[0],
        name=row[1],
        email=row[2],
        cpf=row[3],
        phone=row[4],
        address=row[5],
        password_hash=row[6],
        created_at=row[7],
        active=row[8],
        deleted_at=row[9],
        deleted_by=row[10],
    )


def _duplicate_field(exc: UniqueViolation) -> str:
    """Resuelve qué columna colisionó a partir del nombre de la constraint."""
    diag = getattr(exc, "diag", None)
    constraint = getattr(diag, "constraint_name", None) or ""
    if constraint in _UNIQUE_CONSTRAINTS:
        return _UNIQUE_CONSTRAINTS[constraint]
    return "cpf" if "cpf" in constraint else "email"


def _lookup_filter(include_deleted: bool) -> str:
    return "" if include_deleted else f" AND {_ACTIVE_FILTER}"


class PostgresUserRepository:
    """
    Repositorio de usuarios sobre Postgres.

    El pool es inyectable (tests); si es None se resuelve el global en cada uso.
    """

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

    # --------------------------------------------------------
    # Infra
    # --------------------------------------------------------
    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool
        from ...db.pool import get_pool

        return get_pool()

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        log_msg: str,
        log_extra: dict[str, object],
    ) -> tuple | None:
        """Ejecuta una sentencia ... fetchone() con manejo consistente de errores."""
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except UniqueViolation as exc:
            field = _duplicate_field(exc)
            logger.warning(
                f"{log_msg}: unique violation",
                extra={**log_extra, "field": field},
            )
            raise DuplicateUserError(field) from exc
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise StoreError(f"{log_msg}: {exc}", original_error=exc) from exc

    # --------------------------------------------------------
    # Escritura
    # --------------------------------------------------------
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
        user_id = uuid4()
        row = self._fetchone(
            query=f"""
                INSERT INTO {_TABLE} (id_usuario, nome, email, cpf, telefone, endereco, senha)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING {_USER_COLUMNS}
            """,
            params=(user_id, name, email, cpf, phone, address, password_hash),
            log_msg="PostgresUserRepository: create_user failed",
            log_extra={"user_id": str(user_id)},
        )
        if not row:
            raise StoreError("PostgresUserRepository: create_user failed (no row returned)")
        return _row_to_user(row)

    def update_user(self, user_id: UUID, changes: Mapping[str, Any]) -> Optional[User]:
        """
        Update parcial de un usuario ACTIVO.

        - Solo columnas de UPDATABLE_FIELDS (controladas por código).
        - Sin cambios => estado actual.
        - None si no existe o está eliminado.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Campos no actualizables: {sorted(unknown)}")
        if not changes:
            return self.get_user_by_id(user_id)

        assignments = [f"{_COLUMN_FOR[name]} = %s" for name in changes]
        params: list[object] = list(changes.values())
        params.append(user_id)

        row = self._fetchone(
            query=f"""
                UPDATE {_TABLE}
                SET {", ".join(assignments)}
                WHERE id_usuario = %s AND {_ACTIVE_FILTER}
                RETURNING {_USER_COLUMNS}
            """,
            params=params,
            log_msg="PostgresUserRepository: update_user failed",
            log_extra={"user_id": str(user_id), "fields": sorted(changes)},
        )
        return _row_to_user(row) if row else None

    def soft_delete_user(self, user_id: UUID, *, deleted_by: UUID) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                UPDATE {_TABLE}
                SET active = false, deleted_at = now(), deleted_by = %s
                WHERE id_usuario = %s AND active
                RETURNING {_USER_COLUMNS}
            """,
            params=(deleted_by, user_id),
            log_msg="PostgresUserRepository: soft_delete_user failed",
            log_extra={"user_id": str(user_id), "deleted_by": str(deleted_by)},
        )
        return _row_to_user(row) if row else None

    def restore_user(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                UPDATE {_TABLE}
                SET active = true, deleted_at = NULL, deleted_by = NULL
                WHERE id_usuario = %s AND NOT active
                RETURNING {_USER_COLUMNS}
            """,
            params=(user_id,),
            log_msg="PostgresUserRepository: restore_user failed",
            log_extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    # --------------------------------------------------------
    # Lectura
    # --------------------------------------------------------
    def get_user_by_id(
        self, user_id: UUID, *, include_deleted: bool = False
    ) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM {_TABLE}
                WHERE id_usuario = %s{_lookup_filter(include_deleted)}
            """,
            params=(user_id,),
            log_msg="PostgresUserRepository: get_user_by_id failed",
            log_extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    def get_user_by_email(
        self, email: str, *, include_deleted: bool = False
    ) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM {_TABLE}
                WHERE lower(email) = lower(%s){_lookup_filter(include_deleted)}
            """,
            params=(email,),
            log_msg="PostgresUserRepository: get_user_by_email failed",
            log_extra={},
        )
        return _row_to_user(row) if row else None

    def get_user_by_cpf(
        self, cpf: str, *, include_deleted: bool = False
    ) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM {_TABLE}
                WHERE cpf = %s{_lookup_filter(include_deleted)}
            """,
            params=(cpf,),
            log_msg="PostgresUserRepository: get_user_by_cpf failed",
            log_extra={},
        )
        return _row_to_user(row) if row else None

    def _exists(
        self, where: str, value: str, exclude_id: UUID | None, log_msg: str
    ) -> bool:
        params: list[object] = [value]
        if exclude_id is not None:
            where += " AND id_usuario <> %s"
            params.append(exclude_id)
        row = self._fetchone(
            query=f"SELECT EXISTS (SELECT 1 FROM {_TABLE} WHERE {where})",
            params=params,
            log_msg=log_msg,
            log_extra={"exclude_id": str(exclude_id) if exclude_id else None},
        )
        return bool(row and row[0])

    def email_exists(self, email: str, *, exclude_id: UUID | None = None) -> bool:
        return self._exists(
            "lower(email) = lower(%s)",
            email,
            exclude_id,
            "PostgresUserRepository: email_exists failed",
        )

    def cpf_exists(self, cpf: str, *, exclude_id: UUID | None = None) -> bool:
        return self._exists(
            "cpf = %s",
            cpf,
            exclude_id,
            "PostgresUserRepository: cpf_exists failed",
        )

    def list_users(
        self, *, active: bool, limit: int, offset: int
    ) -> tuple[list[User], int]:
        """
        Página de usuarios activos (o eliminados) + total exacto.

        Guard rails: limit <= 0 => página vacía; offset < 0 => 0.
        """
        where = _ACTIVE_FILTER if active else _DELETED_FILTER
        offset = max(offset, 0)
        log_msg = "PostgresUserRepository: list_users failed"
        log_extra = {"active": active, "limit": limit, "offset": offset}
        try:
            with self._get_pool().connection() as conn:
                total_row = conn.execute(
                    f"SELECT count(*) FROM {_TABLE} WHERE {where}"
                ).fetchone()
                total = int(total_row[0]) if total_row else 0
                if limit <= 0 or offset >= total:
                    return [], total
                rows = conn.execute(
                    f"""
                        SELECT {_USER_COLUMNS}
                        FROM {_TABLE}
                        WHERE {where}
                        ORDER BY {_USER_ORDER_BY}
                        LIMIT %s OFFSET %s
                    """,
                    (limit, offset),
                ).fetchall()
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise StoreError(f"{log_msg}: {exc}", original_error=exc) from exc
        return [_row_to_user(r) for r in rows], total

    def ping(self) -> bool:
        row = self._fetchone(
            query="SELECT 1",
            params=(),
            log_msg="PostgresUserRepository: ping failed",
            log_extra={},
        )
        return bool(row)
