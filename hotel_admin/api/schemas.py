"""
===============================================================================
TARJETA CRC — api/schemas.py (DTOs de respuesta)
===============================================================================

Responsabilidades:
  - Definir la forma pública de un usuario en el wire (nombres en portugués).
  - Garantizar que el hash de la senha nunca se serialice: el DTO no tiene ese campo.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..domain.entities import User


class UserOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(serialization_alias="id_usuario")
    name: str = Field(serialization_alias="nome")
    email: str
    cpf: str
    phone: str = Field(serialization_alias="telefone")
    address: str = Field(serialization_alias="endereco")
    created_at: datetime
    active: bool
    deleted_at: datetime | None = None
    deleted_by: UUID | None = None

    @classmethod
    def from_entity(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            cpf=user.cpf,
            phone=user.phone,
            address=user.address,
            created_at=user.created_at,
            active=user.active,
            deleted_at=user.deleted_at,
            deleted_by=user.deleted_by,
        )


def user_payload(user: User) -> dict[str, Any]:
    """Usuario listo para JSON (aliases de wire, fechas ISO)."""
    return UserOut.from_entity(user).model_dump(mode="json", by_alias=True)


def users_payload(users: list[User]) -> list[dict[str, Any]]:
    return [user_payload(u) for u in users]
