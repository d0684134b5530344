"""
===============================================================================
TARJETA CRC — application/validation.py
===============================================================================

Módulo:
    Validación de input crudo (create / update / login / checks / búsqueda)

Responsabilidades:
    - Validar mappings crudos (JSON del request) con modelos pydantic.
    - Devolver SIEMPRE un ValidationOutcome: valor normalizado o lista de
      FieldError(field, message). Input malformado es un resultado, no una excepción.
    - Traducir errores de pydantic a mensajes por campo (pt-BR, los que muestra el frontend).

Colaboradores:
    - pydantic (modelos + PydanticCustomError)
    - pydantic EmailStr (email-validator) para la sintaxis del email
    - domain.value_objects: is_valid_cpf / normalize_email

Notas:
    - Nombres de campo en el wire: nome, email, cpf, telefone, endereco, senha.
      También se aceptan name, phone, address, password/secret como alias.
    - Los errores siempre reportan el nombre de wire.
===============================================================================
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, TypeVar

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
)
from pydantic_core import PydanticCustomError

from ..domain.value_objects import (
    CPF_LENGTH,
    is_valid_cpf,
    is_valid_user_id,
    normalize_email,
)

T = TypeVar("T")

BODY_FIELD = "body"

# Alias aceptados -> nombre de wire (para reportar errores siempre igual).
_WIRE_NAMES: dict[str, str] = {
    "nome": "nome",
    "name": "nome",
    "email": "email",
    "cpf": "cpf",
    "telefone": "telefone",
    "phone": "telefone",
    "endereco": "endereco",
    "address": "endereco",
    "senha": "senha",
    "password": "senha",
    "secret": "senha",
}

_LABELS: dict[str, str] = {
    "nome": "Nome",
    "email": "Email",
    "cpf": "CPF",
    "telefone": "Telefone",
    "endereco": "Endereço",
    "senha": "Senha",
}

_REQUIRED_MESSAGES: dict[str, str] = {
    "nome": "Nome é obrigatório",
    "email": "Email é obrigatório",
    "cpf": "CPF é obrigatório",
    "telefone": "Telefone é obrigatório",
    "endereco": "Endereço é obrigatório",
    "senha": "Senha é obrigatória",
}

MSG_NOT_AN_OBJECT = "Corpo da requisição deve ser um objeto JSON"
MSG_EMAIL_INVALID = "Email deve ter um formato válido"
MSG_UPDATE_EMPTY = "Pelo menos um campo deve ser fornecido para atualização"
MSG_SEARCH_TOO_SHORT = "Termo de busca deve ter pelo menos 2 caracteres"
SEARCH_MIN_CHARS = 2


@dataclass(frozen=True, slots=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationOutcome(Generic[T]):
    """Resultado de validar input crudo: `value` si ok, `errors` si no."""

    value: T | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_dicts(self) -> list[dict[str, str]]:
        return [e.to_dict() for e in self.errors]


# -----------------------------------------------------------------------------
# Validadores reutilizables
# -----------------------------------------------------------------------------
def _require_email(value: object) -> object:
    """Antes de EmailStr: recorta y distingue vacío (obligatorio) de mal formado."""
    if not isinstance(value, str):
        return value
    value = value.strip()
    if not value:
        raise PydanticCustomError("email_required", _REQUIRED_MESSAGES["email"])
    return value


def _check_cpf(value: str) -> str:
    # isdigit() sola acepta dígitos Unicode (fullwidth, árabe-índicos).
    if not (value.isascii() and value.isdigit()):
        raise PydanticCustomError("cpf_pattern", "CPF deve conter apenas números")
    if not is_valid_cpf(value):
        raise PydanticCustomError("cpf_invalid", "CPF inválido")
    return value


_MODEL_CONFIG = ConfigDict(extra="ignore", frozen=True)

# Tipos de campo: texto recortado salvo la senha (se guarda tal cual).
NameStr = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)
]
UserEmail = Annotated[
    EmailStr, BeforeValidator(_require_email), AfterValidator(normalize_email)
]
CpfStr = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=CPF_LENGTH, max_length=CPF_LENGTH
    ),
]
PhoneStr = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=10, max_length=15)
]
AddressStr = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=5, max_length=200)
]
PasswordStr = Annotated[str, StringConstraints(min_length=6, max_length=50)]

_NAME = AliasChoices("nome", "name")
_PHONE = AliasChoices("telefone", "phone")
_ADDRESS = AliasChoices("endereco", "address")
_PASSWORD = AliasChoices("senha", "password", "secret")


# -----------------------------------------------------------------------------
# Modelos
# -----------------------------------------------------------------------------
class UserCreateInput(BaseModel):
    """Alta de usuario: los seis campos son obligatorios."""

    model_config = _MODEL_CONFIG

    name: NameStr = Field(..., validation_alias=_NAME)
    email: UserEmail
    cpf: CpfStr
    phone: PhoneStr = Field(..., validation_alias=_PHONE)
    address: AddressStr = Field(..., validation_alias=_ADDRESS)
    password: PasswordStr = Field(..., validation_alias=_PASSWORD)

    @field_validator("cpf")
    @classmethod
    def check_cpf(cls, v: str) -> str:
        return _check_cpf(v)


class UserUpdateInput(BaseModel):
    """Patch parcial: mismas reglas que el alta, todos opcionales."""

    model_config = _MODEL_CONFIG

    name: NameStr | None = Field(None, validation_alias=_NAME)
    email: UserEmail | None = None
    cpf: CpfStr | None = None
    phone: PhoneStr | None = Field(None, validation_alias=_PHONE)
    address: AddressStr | None = Field(None, validation_alias=_ADDRESS)
    password: PasswordStr | None = Field(None, validation_alias=_PASSWORD)

    @field_validator("cpf")
    @classmethod
    def check_cpf(cls, v: str | None) -> str | None:
        return None if v is None else _check_cpf(v)

    def changes(self) -> dict[str, str]:
        """Solo los campos presentes (null cuenta como ausente)."""
        return self.model_dump(exclude_none=True)


class LoginInput(BaseModel):
    model_config = _MODEL_CONFIG

    email: UserEmail
    password: str = Field(..., min_length=1, validation_alias=_PASSWORD)


# -----------------------------------------------------------------------------
# Traducción de errores pydantic -> FieldError
# -----------------------------------------------------------------------------
def _message_for(wire: str, err: dict[str, Any]) -> str:
    err_type = err.get("type", "")
    ctx = err.get("ctx") or {}
    label = _LABELS.get(wire, wire)

    if err_type == "missing":
        return _REQUIRED_MESSAGES.get(wire, f"{label} é obrigatório")
    if err_type == "value_error" and wire == "email":
        # EmailStr (email-validator) rechazó la sintaxis.
        return MSG_EMAIL_INVALID
    if err_type in {"string_too_short", "string_too_long"} and wire == "cpf":
        return f"CPF deve ter exatamente {CPF_LENGTH} dígitos"
    if err_type == "string_too_short":
        if ctx.get("min_length") == 1:
            return _REQUIRED_MESSAGES.get(wire, f"{label} é obrigatório")
        return f"{label} deve ter pelo menos {ctx.get('min_length')} caracteres"
    if err_type == "string_too_long":
        return f"{label} deve ter no máximo {ctx.get('max_length')} caracteres"
    if err_type == "string_type":
        return f"{label} deve ser um texto"
    return str(err.get("msg", "Valor inválido"))


def _to_field_errors(exc: ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        raw_field = str(loc[0]) if loc else BODY_FIELD
        wire = _WIRE_NAMES.get(raw_field, raw_field)
        errors.append(FieldError(field=wire, message=_message_for(wire, err)))
    return errors


def _validate(model: type[BaseModel], raw: object) -> ValidationOutcome[Any]:
    if not isinstance(raw, Mapping):
        return ValidationOutcome(errors=[FieldError(BODY_FIELD, MSG_NOT_AN_OBJECT)])
    try:
        return ValidationOutcome(value=model.model_validate(dict(raw)))
    except ValidationError as exc:
        return ValidationOutcome(errors=_to_field_errors(exc))


# -----------------------------------------------------------------------------
# API pública
# -----------------------------------------------------------------------------
def validate_user_create(raw: object) -> ValidationOutcome[UserCreateInput]:
    return _validate(UserCreateInput, raw)


def validate_user_update(raw: object) -> ValidationOutcome[UserUpdateInput]:
    outcome = _validate(UserUpdateInput, raw)
    if outcome.ok and not outcome.value.changes():
        return ValidationOutcome(errors=[FieldError(BODY_FIELD, MSG_UPDATE_EMPTY)])
    return outcome


def validate_login(raw: object) -> ValidationOutcome[LoginInput]:
    return _validate(LoginInput, raw)


def validate_availability(raw: object, field_name: str) -> ValidationOutcome[str]:
    """
    Body de check-email / check-cpf: `{<field_name>: str}`.

    Solo exige presencia; el formato no se valida (un valor mal formado
    simplemente no existe en la base y se informa como disponible).
    """
    if not isinstance(raw, Mapping):
        return ValidationOutcome(errors=[FieldError(BODY_FIELD, MSG_NOT_AN_OBJECT)])
    value = raw.get(field_name)
    if not isinstance(value, str) or not value.strip():
        return ValidationOutcome(
            errors=[FieldError(field_name, _REQUIRED_MESSAGES[field_name])]
        )
    value = value.strip()
    return ValidationOutcome(
        value=normalize_email(value) if field_name == "email" else value
    )


def validate_search_query(q: object) -> ValidationOutcome[str]:
    if not isinstance(q, str) or len(q.strip()) < SEARCH_MIN_CHARS:
        return ValidationOutcome(errors=[FieldError("q", MSG_SEARCH_TOO_SHORT)])
    return ValidationOutcome(value=q.strip())


__all__ = [
    "FieldError",
    "LoginInput",
    "UserCreateInput",
    "UserUpdateInput",
    "ValidationOutcome",
    "is_valid_user_id",
    "validate_availability",
    "validate_login",
    "validate_search_query",
    "validate_user_create",
    "validate_user_update",
]
