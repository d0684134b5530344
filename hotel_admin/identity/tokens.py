"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Token de sesión devuelto por register/login

Responsabilidades:
    - Emitir un JWT HS256 con `sub` (id del usuario), `iat` y `exp`.
    - Decodificar/validar el token (firma, exp, claims mínimos).
    - Resolver el actor de una operación (deleted_by) desde Authorization: Bearer.

Colaboradores:
    - PyJWT
    - crosscutting.config.get_settings: secreto y TTL.

Notas:
    - El token NO protege rutas (no hay autorización en este backend); solo
      identifica al actor cuando el cliente lo envía.
    - No loguear tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from ..crosscutting.config import get_settings

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_SESSION: str = "session"


class InvalidTokenError(Exception):
    """Token ausente de claims, expirado, o con firma inválida."""


@dataclass(frozen=True, slots=True)
class TokenSettings:
    secret: str
    ttl_minutes: int


def get_token_settings() -> TokenSettings:
    s = get_settings()
    return TokenSettings(secret=s.jwt_secret, ttl_minutes=s.jwt_access_ttl_minutes)


def create_session_token(
    user_id: UUID, settings: TokenSettings | None = None
) -> str:
    """Emite el token de sesión para `user_id`."""
    token_settings = settings or get_token_settings()
    now = datetime.now(timezone.utc)
    payload: dict[str, object] = {
        CLAIM_SUB: str(user_id),
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int(
            (now + timedelta(minutes=token_settings.ttl_minutes)).timestamp()
        ),
        CLAIM_TYP: TOKEN_TYPE_SESSION,
    }
    return jwt.encode(payload, token_settings.secret, algorithm=JWT_ALGORITHM)


def decode_session_token(token: str, settings: TokenSettings | None = None) -> UUID:
    """Valida el token y devuelve el id del usuario (`sub`)."""
    token_settings = settings or get_token_settings()
    try:
        payload = jwt.decode(
            token,
            token_settings.secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token expirado.") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError("Token inválido.") from exc

    if payload.get(CLAIM_TYP, TOKEN_TYPE_SESSION) != TOKEN_TYPE_SESSION:
        raise InvalidTokenError("Tipo de token inválido.")

    try:
        return UUID(str(payload[CLAIM_SUB]))
    except ValueError as exc:
        raise InvalidTokenError("Token inválido.") from exc


def extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None
