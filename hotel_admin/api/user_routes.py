"""
===============================================================================
TARJETA CRC — api/user_routes.py (CRUD de usuarios + soft delete)
===============================================================================

Responsabilidades:
  - Listado paginado (activos / eliminados) y búsqueda.
  - Consulta, alta, edición parcial, soft delete y restore por id.
  - POST /users/login: alias de /auth/login que el frontend todavía usa.
  - Validar el id (UUID) antes de consultar el store.

Notas:
  - /search y /deleted se declaran antes de /{user_id} para que no los capture.
  - Sin autorización: el token (si viene) solo identifica a quien elimina.
===============================================================================
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query

from ..application.usecases.users import (
    CreateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    RestoreUserUseCase,
    SearchUsersUseCase,
    SoftDeleteUserUseCase,
    UpdateUserUseCase,
    UserPageResult,
)
from ..application.validation import (
    MSG_SEARCH_TOO_SHORT,
    validate_search_query,
    validate_user_create,
    validate_user_update,
)
from ..container import get_user_repository
from ..crosscutting.envelope import ok
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..domain.repositories import UserRepository
from .auth_routes import login as auth_login
from .deps import optional_actor, page_params, parse_user_id, require_valid, to_http_error
from .schemas import user_payload, users_payload

router = APIRouter(prefix="/users", tags=["users"], responses=OPENAPI_ERROR_RESPONSES)


def _page_data(result: UserPageResult) -> dict[str, Any]:
    data: dict[str, Any] = {"users": users_payload(result.users)}
    if result.query is not None:
        data["query"] = result.query
    data["pagination"] = result.pagination.model_dump(by_alias=True)
    return data


# -----------------------------------------------------------------------------
# Colecciones
# -----------------------------------------------------------------------------
@router.get("")
def list_users(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    repo: UserRepository = Depends(get_user_repository),
):
    result = ListUsersUseCase(repo).execute(page_params(page, limit))
    return ok("Usuários listados com sucesso", _page_data(result))


@router.get("/search")
def search_users(
    q: str | None = Query(default=None),
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    repo: UserRepository = Depends(get_user_repository),
):
    query = require_valid(validate_search_query(q), detail=MSG_SEARCH_TOO_SHORT)
    result = SearchUsersUseCase(repo).execute(query, page_params(page, limit))
    return ok("Busca realizada com sucesso", _page_data(result))


@router.get("/deleted")
def list_deleted_users(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    repo: UserRepository = Depends(get_user_repository),
):
    result = ListUsersUseCase(repo).execute_deleted(page_params(page, limit))
    return ok("Usuários deletados listados com sucesso", _page_data(result))


@router.post("", status_code=201)
def create_user(
    payload: Any = Body(default=None),
    repo: UserRepository = Depends(get_user_repository),
):
    data = require_valid(validate_user_create(payload))
    result = CreateUserUseCase(repo).execute(data)
    if result.error:
        raise to_http_error(result.error)
    return ok("Usuário criado com sucesso", user_payload(result.user), code="USER_CREATED")


@router.post("/login")
def login(
    payload: Any = Body(default=None),
    repo: UserRepository = Depends(get_user_repository),
):
    """Ruta histórica del frontend: mismo contrato que /api/auth/login."""
    return auth_login(payload, repo)


# -----------------------------------------------------------------------------
# Recurso individual
# -----------------------------------------------------------------------------
@router.get("/{user_id}")
def get_user(user_id: str, repo: UserRepository = Depends(get_user_repository)):
    result = GetUserUseCase(repo).execute(parse_user_id(user_id))
    if result.error:
        raise to_http_error(result.error)
    return ok("Usuário encontrado com sucesso", user_payload(result.user))


@router.put("/{user_id}")
def update_user(
    user_id: str,
    payload: Any = Body(default=None),
    repo: UserRepository = Depends(get_user_repository),
):
    target = parse_user_id(user_id)
    data = require_valid(validate_user_update(payload))
    result = UpdateUserUseCase(repo).execute(target, data)
    if result.error:
        raise to_http_error(result.error)
    return ok(
        "Usuário atualizado com sucesso", user_payload(result.user), code="USER_UPDATED"
    )


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    actor: UUID | None = Depends(optional_actor),
    repo: UserRepository = Depends(get_user_repository),
):
    target = parse_user_id(user_id)
    result = SoftDeleteUserUseCase(repo).execute(target, deleted_by=actor)
    if result.error:
        raise to_http_error(result.error)
    return ok(
        "Usuário excluído com sucesso", user_payload(result.user), code="USER_DELETED"
    )


@router.post("/{user_id}/restore")
def restore_user(user_id: str, repo: UserRepository = Depends(get_user_repository)):
    result = RestoreUserUseCase(repo).execute(parse_user_id(user_id))
    if result.error:
        raise to_http_error(result.error)
    return ok(
        "Usuário restaurado com sucesso", user_payload(result.user), code="USER_RESTORED"
    )
