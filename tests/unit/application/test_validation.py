"""
Name: Input Validation Tests

Responsibilities:
  - Field-level Portuguese messages for create / update / login
  - Normalization (trim, lower-cased email, senha kept verbatim)
  - Never raising on malformed input (non-mapping bodies)
"""

import pytest

from hotel_admin.application.validation import (
    MSG_NOT_AN_OBJECT,
    MSG_SEARCH_TOO_SHORT,
    MSG_UPDATE_EMPTY,
    validate_availability,
    validate_login,
    validate_search_query,
    validate_user_create,
    validate_user_update,
)

pytestmark = pytest.mark.unit


def _messages(outcome) -> dict[str, str]:
    return {e.field: e.message for e in outcome.errors}


class TestCreate:
    def test_valid_payload_is_normalized(self, make_payload):
        outcome = validate_user_create(
            make_payload(nome="  Maria Silva ", email=" Maria@Hotel.COM ")
        )
        assert outcome.ok
        assert outcome.value.name == "Maria Silva"
        assert outcome.value.email == "maria@hotel.com"

    def test_senha_is_not_trimmed(self, make_payload):
        outcome = validate_user_create(make_payload(senha="  abc123  "))
        assert outcome.value.password == "  abc123  "

    def test_english_aliases_accepted(self):
        outcome = validate_user_create(
            {
                "name": "John Smith",
                "email": "john@hotel.com",
                "cpf": "11144477735",
                "phone": "11987654321",
                "address": "Main Street 1",
                "password": "secret1",
            }
        )
        assert outcome.ok
        assert outcome.value.phone == "11987654321"

    def test_all_fields_required(self):
        outcome = validate_user_create({})
        messages = _messages(outcome)
        assert not outcome.ok
        assert messages == {
            "nome": "Nome é obrigatório",
            "email": "Email é obrigatório",
            "cpf": "CPF é obrigatório",
            "telefone": "Telefone é obrigatório",
            "endereco": "Endereço é obrigatório",
            "senha": "Senha é obrigatória",
        }

    def test_invalid_email(self, make_payload):
        outcome = validate_user_create(make_payload(email="maria.hotel.com"))
        assert _messages(outcome) == {"email": "Email deve ter um formato válido"}

    @pytest.mark.parametrize(
        "email",
        ["user@exemplo.123", "maria@hotel", "@hotel.com", "a..b@hotel.com", "maria@"],
    )
    def test_malformed_emails(self, make_payload, email):
        outcome = validate_user_create(make_payload(email=email))
        assert _messages(outcome) == {"email": "Email deve ter um formato válido"}

    @pytest.mark.parametrize(
        "email", ["josé@exemplo.com.br", "x+tag@sub.domain.io", "a@b.co"]
    )
    def test_accepted_emails(self, make_payload, email):
        outcome = validate_user_create(make_payload(email=email))
        assert outcome.ok, outcome.error_dicts()
        assert outcome.value.email == email

    def test_blank_email_is_required(self, make_payload):
        outcome = validate_user_create(make_payload(email="   "))
        assert _messages(outcome) == {"email": "Email é obrigatório"}

    def test_short_name(self, make_payload):
        outcome = validate_user_create(make_payload(nome="M"))
        assert _messages(outcome) == {"nome": "Nome deve ter pelo menos 2 caracteres"}

    def test_long_address(self, make_payload):
        outcome = validate_user_create(make_payload(endereco="x" * 201))
        assert _messages(outcome) == {
            "endereco": "Endereço deve ter no máximo 200 caracteres"
        }

    def test_short_phone(self, make_payload):
        outcome = validate_user_create(make_payload(telefone="123"))
        assert _messages(outcome) == {
            "telefone": "Telefone deve ter pelo menos 10 caracteres"
        }

    def test_short_senha(self, make_payload):
        outcome = validate_user_create(make_payload(senha="12345"))
        assert _messages(outcome) == {"senha": "Senha deve ter pelo menos 6 caracteres"}

    def test_cpf_wrong_length(self, make_payload):
        outcome = validate_user_create(make_payload(cpf="123"))
        assert _messages(outcome) == {"cpf": "CPF deve ter exatamente 11 dígitos"}

    def test_cpf_non_numeric(self, make_payload):
        outcome = validate_user_create(make_payload(cpf="5299822472a"))
        assert _messages(outcome) == {"cpf": "CPF deve conter apenas números"}

    @pytest.mark.parametrize(
        "cpf",
        [
            "\uff15\uff12\uff19\uff19\uff18\uff12\uff12\uff14\uff17\uff12\uff15",
            "\u0665\u0662\u0669\u0669\u0668\u0662\u0662\u0664\u0667\u0662\u0665",
        ],
    )
    def test_cpf_non_ascii_digits(self, make_payload, cpf):
        outcome = validate_user_create(make_payload(cpf=cpf))
        assert _messages(outcome) == {"cpf": "CPF deve conter apenas números"}

    def test_cpf_bad_checksum(self, make_payload):
        outcome = validate_user_create(make_payload(cpf="52998224724"))
        assert _messages(outcome) == {"cpf": "CPF inválido"}

    def test_cpf_repeated_digits(self, make_payload):
        outcome = validate_user_create(make_payload(cpf="11111111111"))
        assert _messages(outcome) == {"cpf": "CPF inválido"}

    def test_wrong_type(self, make_payload):
        outcome = validate_user_create(make_payload(nome=123))
        assert _messages(outcome) == {"nome": "Nome deve ser um texto"}

    @pytest.mark.parametrize("raw", [None, [], "texto", 42])
    def test_non_mapping_body(self, raw):
        outcome = validate_user_create(raw)
        assert not outcome.ok
        assert outcome.error_dicts() == [{"field": "body", "message": MSG_NOT_AN_OBJECT}]


class TestUpdate:
    def test_single_field(self):
        outcome = validate_user_update({"telefone": "21999998888"})
        assert outcome.ok
        assert outcome.value.changes() == {"phone": "21999998888"}

    def test_empty_patch_rejected(self):
        outcome = validate_user_update({})
        assert outcome.error_dicts() == [{"field": "body", "message": MSG_UPDATE_EMPTY}]

    def test_unknown_fields_only_rejected(self):
        outcome = validate_user_update({"active": False})
        assert not outcome.ok
        assert outcome.errors[0].message == MSG_UPDATE_EMPTY

    def test_same_rules_as_create(self):
        outcome = validate_user_update({"email": "nope", "cpf": "52998224724"})
        assert _messages(outcome) == {
            "email": "Email deve ter um formato válido",
            "cpf": "CPF inválido",
        }


class TestLogin:
    def test_valid(self):
        outcome = validate_login({"email": "MARIA@hotel.com", "senha": "x"})
        assert outcome.ok
        assert outcome.value.email == "maria@hotel.com"

    def test_empty_senha(self):
        outcome = validate_login({"email": "maria@hotel.com", "senha": ""})
        assert _messages(outcome) == {"senha": "Senha é obrigatória"}

    def test_missing_everything(self):
        outcome = validate_login({})
        assert set(_messages(outcome)) == {"email", "senha"}


class TestAvailabilityAndSearch:
    def test_email_required(self):
        outcome = validate_availability({}, "email")
        assert outcome.error_dicts() == [
            {"field": "email", "message": "Email é obrigatório"}
        ]

    def test_cpf_required(self):
        outcome = validate_availability({"cpf": "  "}, "cpf")
        assert outcome.error_dicts() == [{"field": "cpf", "message": "CPF é obrigatório"}]

    def test_email_normalized(self):
        assert validate_availability({"email": " A@B.CO "}, "email").value == "a@b.co"

    @pytest.mark.parametrize("q", [None, "", " ", "a", " a "])
    def test_search_too_short(self, q):
        outcome = validate_search_query(q)
        assert outcome.errors[0].message == MSG_SEARCH_TOO_SHORT

    def test_search_ok(self):
        assert validate_search_query(" ma ").value == "ma"
