"""
===============================================================================
USER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    User Use Case Results

Business Goal:
    Modelos compartidos de resultado y error para los casos de uso de usuarios.
    Los use cases devuelven resultados tipados en lugar de lanzar excepciones
    hacia afuera; la capa HTTP mapea cada código a un status.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    user_results models (module)

Responsibilities:
    - Definir UserErrorCode (categorías estables, no mensajes).
    - Representar UserError (code + message en pt-BR, el que ve el cliente).
    - Representar resultados:
        * UserResult (un usuario; token opcional para register/login)
        * UserPageResult (página de usuarios + total)
        * AvailabilityResult (check-email / check-cpf)

Collaborators:
    - domain.entities.User
    - crosscutting.pagination.PageParams / pagination_info
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....crosscutting.pagination import PageParams, PaginationInfo, pagination_info
from ....domain.entities import User


class UserErrorCode(str, Enum):
    """
    Códigos de error de los casos de uso de usuarios.

      - NOT_FOUND: no existe (o no está activo cuando se exige activo).
      - EMAIL_ALREADY_EXISTS / CPF_ALREADY_EXISTS: colisión de unicidad.
      - INVALID_CREDENTIALS: email desconocido o senha incorrecta.
      - ACCOUNT_DEACTIVATED: senha correcta sobre una cuenta eliminada.
      - USER_ALREADY_DELETED / USER_ALREADY_ACTIVE: transición sin efecto.
    """

    NOT_FOUND = "USER_NOT_FOUND"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    CPF_ALREADY_EXISTS = "CPF_ALREADY_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    USER_ALREADY_DELETED = "USER_ALREADY_DELETED"
    USER_ALREADY_ACTIVE = "USER_ALREADY_ACTIVE"


@dataclass(frozen=True)
class UserError:
    code: UserErrorCode
    message: str


# Mensajes estables por código (los mismos que consume el frontend).
ERROR_MESSAGES: dict[UserErrorCode, str] = {
    UserErrorCode.NOT_FOUND: "Usuário não encontrado",
    UserErrorCode.EMAIL_ALREADY_EXISTS: "Email já está em uso",
    UserErrorCode.CPF_ALREADY_EXISTS: "CPF já está cadastrado",
    UserErrorCode.INVALID_CREDENTIALS: "Email ou senha incorretos",
    UserErrorCode.ACCOUNT_DEACTIVATED: (
        "Conta desativada. Entre em contato com o suporte."
    ),
    UserErrorCode.USER_ALREADY_DELETED: "Usuário já está excluído",
    UserErrorCode.USER_ALREADY_ACTIVE: "Usuário já está ativo",
}


def user_error(code: UserErrorCode) -> UserError:
    return UserError(code=code, message=ERROR_MESSAGES[code])


@dataclass
class UserResult:
    """
    Resultado para casos de uso que retornan un único usuario.

    Contrato:
      - error is None => user presente
      - token solo en register/login
    """

    user: User | None = None
    error: UserError | None = None
    token: str | None = None


@dataclass
class UserPageResult:
    """Página de usuarios + total exacto del filtro (activos o eliminados)."""

    users: List[User] = field(default_factory=list)
    total: int = 0
    params: PageParams = field(default_factory=lambda: PageParams(page=1, limit=10))
    query: str | None = None

    @property
    def pagination(self) -> PaginationInfo:
        return pagination_info(self.params, self.total)


@dataclass
class AvailabilityResult:
    field: str
    value: str
    available: bool

    @property
    def message(self) -> str:
        if self.field == "cpf":
            return "CPF disponível" if self.available else "CPF já está cadastrado"
        return "Email disponível" if self.available else "Email já está em uso"
