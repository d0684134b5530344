"""Casos de uso de usuarios (alta, login, consulta, edición, soft delete)."""

from .authenticate_user import AuthenticateUserUseCase
from .check_availability import CheckAvailabilityUseCase
from .create_user import CreateUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersUseCase
from .restore_user import RestoreUserUseCase
from .search_users import SearchUsersUseCase
from .soft_delete_user import SoftDeleteUserUseCase
from .update_user import UpdateUserUseCase
from .user_results import (
    AvailabilityResult,
    UserError,
    UserErrorCode,
    UserPageResult,
    UserResult,
)

__all__ = [
    "AuthenticateUserUseCase",
    "AvailabilityResult",
    "CheckAvailabilityUseCase",
    "CreateUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "RestoreUserUseCase",
    "SearchUsersUseCase",
    "SoftDeleteUserUseCase",
    "UpdateUserUseCase",
    "UserError",
    "UserErrorCode",
    "UserPageResult",
    "UserResult",
]
