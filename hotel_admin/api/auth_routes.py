"""
===============================================================================
TARJETA CRC — api/auth_routes.py (Registro, Login y chequeos de disponibilidad)
===============================================================================

Responsabilidades:
  - POST /auth/register: alta + token de sesión.
  - POST /auth/login: credenciales -> usuario + token de sesión.
  - POST /auth/check-email | /auth/check-cpf: disponibilidad para la UI de registro.

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP <-> caso de uso.
  - Validación con ValidationOutcome (400 con errores por campo) antes del use case.

Colaboradores:
  - application.validation
  - application.usecases.users: CreateUser / AuthenticateUser / CheckAvailability
  - identity.tokens.create_session_token
  - container.get_user_repository
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from ..application.usecases.users import (
    AuthenticateUserUseCase,
    CheckAvailabilityUseCase,
    CreateUserUseCase,
)
from ..application.validation import (
    validate_availability,
    validate_login,
    validate_user_create,
)
from ..container import get_user_repository
from ..crosscutting.envelope import ok
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..domain.repositories import UserRepository
from ..identity.tokens import create_session_token
from .deps import require_valid, to_http_error
from .schemas import user_payload

router = APIRouter(prefix="/auth", tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)


@router.post("/register", status_code=201)
def register(
    payload: Any = Body(default=None),
    repo: UserRepository = Depends(get_user_repository),
):
    data = require_valid(validate_user_create(payload))
    result = CreateUserUseCase(repo).execute(data)
    if result.error:
        raise to_http_error(result.error)
    return ok(
        "Usuário cadastrado com sucesso",
        user_payload(result.user),
        code="USER_CREATED",
        token=create_session_token(result.user.id),
    )


@router.post("/login")
def login(
    payload: Any = Body(default=None),
    repo: UserRepository = Depends(get_user_repository),
):
    data = require_valid(validate_login(payload))
    result = AuthenticateUserUseCase(repo).execute(data)
    if result.error:
        raise to_http_error(result.error)
    return ok(
        "Login realizado com sucesso",
        user_payload(result.user),
        code="LOGIN_SUCCESS",
        token=create_session_token(result.user.id),
    )


@router.post("/check-email")
def check_email(
    payload: Any = Body(default=None),
    repo: UserRepository = Depends(get_user_repository),
):
    email = require_valid(validate_availability(payload, "email"))
    result = CheckAvailabilityUseCase(repo).check_email(email)
    return ok(result.message, available=result.available)


@router.post("/check-cpf")
def check_cpf(
    payload: Any = Body(default=None),
    repo: UserRepository = Depends(get_user_repository),
):
    cpf = require_valid(validate_availability(payload, "cpf"))
    result = CheckAvailabilityUseCase(repo).check_cpf(cpf)
    return ok(result.message, available=result.available)
