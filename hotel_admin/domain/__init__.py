"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Exportaciones de la capa de dominio. No importar infraestructura aquí.
===============================================================================
"""

from .entities import User
from .repositories import UPDATABLE_FIELDS, UserRepository
from .value_objects import (
    is_valid_cpf,
    is_valid_user_id,
    normalize_email,
)

__all__ = [
    "User",
    "UserRepository",
    "UPDATABLE_FIELDS",
    "is_valid_cpf",
    "is_valid_user_id",
    "normalize_email",
]
