# =============================================================================
# FILE: domain/value_objects.py
# =============================================================================
"""
===============================================================================
DOMAIN: Value Objects / primitivas de validación
===============================================================================

Contenido:
    - CPF: normalización + dígitos verificadores (mod 11, dos pasadas)
    - Email: normalización (trim + lower); la sintaxis la valida pydantic EmailStr
    - UserId: forma del identificador (UUID versión 1-5, variante RFC 4122)

Principios:
    - Funciones puras, sin side effects
    - Sin dependencias de infraestructura
===============================================================================
"""

from __future__ import annotations

import re
from typing import Final

# -----------------------------------------------------------------------------
# CPF
# -----------------------------------------------------------------------------
CPF_LENGTH: Final[int] = 11
_CPF_DIGITS_RE: Final = re.compile(r"^[0-9]{11}$")


def _cpf_check_digit(digits: str) -> int:
    """Dígito verificador para los primeros len(digits) dígitos (pesos decrecientes)."""
    weight_start = len(digits) + 1
    total = sum(int(d) * (weight_start - i) for i, d in enumerate(digits))
    remainder = (total * 10) % 11
    return 0 if remainder == 10 else remainder


def is_valid_cpf(value: str) -> bool:
    """
    Valida un CPF de 11 dígitos.

    Reglas:
      - exactamente 11 dígitos ASCII 0-9 (sin máscara)
      - secuencias repetidas (000..., 111..., ...) son inválidas
      - d10 y d11 deben coincidir con los dígitos verificadores mod 11
    """
    if not isinstance(value, str) or not _CPF_DIGITS_RE.match(value):
        return False
    if len(set(value)) == 1:
        return False

    first = _cpf_check_digit(value[:9])
    if first != int(value[9]):
        return False
    second = _cpf_check_digit(value[:10])
    return second == int(value[10])


# -----------------------------------------------------------------------------
# Email
# -----------------------------------------------------------------------------
def normalize_email(value: str) -> str:
    """Emails se comparan case-insensitive: se guardan en minúsculas."""
    return (value or "").strip().lower()


# -----------------------------------------------------------------------------
# UserId
# -----------------------------------------------------------------------------
_USER_ID_RE: Final = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_user_id(value: object) -> bool:
    """True si `value` tiene forma de UUID v1-v5 (chequeo previo a cualquier lookup)."""
    return isinstance(value, str) and bool(_USER_ID_RE.match(value))
