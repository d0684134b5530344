"""
===============================================================================
TARJETA CRC — api/deps.py (helpers compartidos por los routers)
===============================================================================

Responsabilidades:
  - Validar el id de ruta (UUID) ANTES de tocar el store -> 400 INVALID_ID.
  - Normalizar page/limit desde la query string con los límites de Settings.
  - Resolver el actor (deleted_by) desde Authorization: Bearer.
  - Traducir UserError (resultado de use case) -> AppHTTPException.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import Header

from ..application.usecases.users import UserError, UserErrorCode
from ..application.validation import ValidationOutcome, is_valid_user_id
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    conflict,
    invalid_id,
    not_found,
    unauthorized,
    validation_error,
)
from ..crosscutting.pagination import PageParams, normalize_pagination
from ..identity.tokens import (
    InvalidTokenError,
    decode_session_token,
    extract_bearer_token,
)

_CONFLICTS = {
    UserErrorCode.EMAIL_ALREADY_EXISTS,
    UserErrorCode.CPF_ALREADY_EXISTS,
    UserErrorCode.USER_ALREADY_DELETED,
    UserErrorCode.USER_ALREADY_ACTIVE,
}
_UNAUTHORIZED = {
    UserErrorCode.INVALID_CREDENTIALS,
    UserErrorCode.ACCOUNT_DEACTIVATED,
}


def to_http_error(error: UserError) -> AppHTTPException:
    if error.code == UserErrorCode.NOT_FOUND:
        return not_found(error.message)
    if error.code in _CONFLICTS:
        return conflict(ErrorCode(error.code.value), error.message)
    if error.code in _UNAUTHORIZED:
        return unauthorized(ErrorCode(error.code.value), error.message)
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, error.message)


def require_valid(outcome: ValidationOutcome, detail: str | None = None):
    """Devuelve outcome.value o levanta 400 VALIDATION_ERROR con errores por campo."""
    if not outcome.ok:
        if detail is None:
            raise validation_error(errors=outcome.error_dicts())
        raise validation_error(detail=detail, errors=outcome.error_dicts())
    return outcome.value


def parse_user_id(raw: str) -> UUID:
    if not is_valid_user_id(raw):
        raise invalid_id()
    return UUID(raw)


def page_params(page: str | None, limit: str | None) -> PageParams:
    settings = get_settings()
    return normalize_pagination(
        page,
        limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )


def optional_actor(authorization: str | None = Header(default=None)) -> UUID | None:
    """
    Id del usuario que opera, si envió un token.

    Sin header Bearer => None (el caller decide el default).
    Token presente pero inválido/expirado => 401 INVALID_TOKEN.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return None
    try:
        return decode_session_token(token)
    except InvalidTokenError as exc:
        raise unauthorized(ErrorCode.INVALID_TOKEN, "Token inválido ou expirado") from exc
