"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Hash / verificación de contraseñas (Argon2)

Responsabilidades:
    - Hashear contraseñas con Argon2id (salt aleatorio por hash, costo adaptable).
    - Verificar contraseña vs hash almacenado (tiempo constante, lo provee argon2).
    - Detectar hashes generados con parámetros viejos (needs_rehash).

Colaboradores:
    - argon2.PasswordHasher
    - crosscutting.config.get_settings: time_cost / memory_cost.

Decisiones:
    - Nunca loguear ni devolver la contraseña en texto plano.
    - Mismatch y hash corrupto devuelven False (el caller no distingue).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from ..crosscutting.config import get_settings


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    """Hasher singleton configurado desde Settings."""
    s = get_settings()
    return PasswordHasher(
        time_cost=s.password_time_cost,
        memory_cost=s.password_memory_cost_kib,
    )


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2."""
    return get_password_hasher().hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    if not password or not password_hash:
        return False
    try:
        return get_password_hasher().verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def needs_rehash(password_hash: str) -> bool:
    """True si el hash fue generado con parámetros distintos a los actuales."""
    try:
        return get_password_hasher().check_needs_rehash(password_hash)
    except InvalidHashError:
        return True


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("hotel-admin-dummy-password")


def verify_dummy_password(password: str) -> bool:
    """
    Verifica contra un hash descartable.

    Login con email desconocido paga el mismo costo argon2 que uno existente,
    así el tiempo de respuesta no revela qué emails están registrados.
    """
    verify_password(password, _dummy_hash())
    return False
