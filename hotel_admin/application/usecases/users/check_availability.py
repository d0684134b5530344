"""
USE CASE: Check Availability (check-email / check-cpf)

Consulta si un email o CPF ya está registrado en CUALQUIER fila (activa o
eliminada). Es un hint para la UI de registro; el alta vuelve a validar.
"""

from __future__ import annotations

from ....domain.repositories import UserRepository
from .user_results import AvailabilityResult


class CheckAvailabilityUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def check_email(self, email: str) -> AvailabilityResult:
        taken = self._users.email_exists(email)
        return AvailabilityResult(field="email", value=email, available=not taken)

    def check_cpf(self, cpf: str) -> AvailabilityResult:
        taken = self._users.cpf_exists(cpf)
        return AvailabilityResult(field="cpf", value=cpf, available=not taken)
