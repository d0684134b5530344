"""
Name: User Use Case Tests

Responsibilities:
  - Register / login / availability rules
  - Listing and search pagination
  - Update uniqueness and guarded soft delete / restore transitions

Collaborators:
  - InMemoryUserRepository (fixture `repo`)
  - application.validation (inputs are built from raw payloads)
"""

from uuid import uuid4

import pytest
from argon2 import PasswordHasher

from hotel_admin.application.usecases.users import (
    AuthenticateUserUseCase,
    CheckAvailabilityUseCase,
    CreateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    RestoreUserUseCase,
    SearchUsersUseCase,
    SoftDeleteUserUseCase,
    UpdateUserUseCase,
    UserErrorCode,
)
from hotel_admin.application.usecases.users import authenticate_user
from hotel_admin.application.validation import (
    validate_login,
    validate_user_create,
    validate_user_update,
)
from hotel_admin.crosscutting.exceptions import DuplicateUserError
from hotel_admin.crosscutting.pagination import PageParams
from hotel_admin.identity.passwords import verify_password

pytestmark = pytest.mark.unit

DEFAULT_PASSWORD = "segredo123"
VALID_CPFS = ["52998224725", "11144477735", "12345678909", "39053344705"]


def _create_input(make_payload, **overrides):
    outcome = validate_user_create(make_payload(**overrides))
    assert outcome.ok, outcome.error_dicts()
    return outcome.value


def _login_input(email, password=DEFAULT_PASSWORD):
    outcome = validate_login({"email": email, "senha": password})
    assert outcome.ok
    return outcome.value


def _update_input(**raw):
    outcome = validate_user_update(raw)
    assert outcome.ok, outcome.error_dicts()
    return outcome.value


# =============================================================================
# Create
# =============================================================================


class TestCreateUser:
    def test_creates_active_user_with_hashed_password(self, repo, make_payload):
        result = CreateUserUseCase(repo).execute(_create_input(make_payload))

        assert result.error is None
        user = result.user
        assert user.active is True
        assert user.deleted_at is None and user.deleted_by is None
        assert user.password_hash != DEFAULT_PASSWORD
        assert verify_password(DEFAULT_PASSWORD, user.password_hash)

    def test_email_is_stored_lowercase(self, repo, make_payload):
        result = CreateUserUseCase(repo).execute(
            _create_input(make_payload, email="  Maria@Hotel.COM ")
        )
        assert result.user.email == "maria@hotel.com"

    def test_duplicate_email_case_insensitive(self, repo, make_payload):
        use_case = CreateUserUseCase(repo)
        use_case.execute(_create_input(make_payload))

        result = use_case.execute(
            _create_input(make_payload, email="MARIA@hotel.com", cpf=VALID_CPFS[1])
        )

        assert result.user is None
        assert result.error.code == UserErrorCode.EMAIL_ALREADY_EXISTS
        assert result.error.message == "Email já está em uso"

    def test_duplicate_cpf(self, repo, make_payload):
        use_case = CreateUserUseCase(repo)
        use_case.execute(_create_input(make_payload))

        result = use_case.execute(_create_input(make_payload, email="outra@hotel.com"))

        assert result.error.code == UserErrorCode.CPF_ALREADY_EXISTS
        assert result.error.message == "CPF já está cadastrado"

    def test_soft_deleted_user_still_holds_email(self, repo, make_payload):
        created = CreateUserUseCase(repo).execute(_create_input(make_payload)).user
        SoftDeleteUserUseCase(repo).execute(created.id)

        result = CreateUserUseCase(repo).execute(
            _create_input(make_payload, cpf=VALID_CPFS[2])
        )

        assert result.error.code == UserErrorCode.EMAIL_ALREADY_EXISTS

    def test_store_race_maps_to_conflict(self, make_payload):
        class RacingRepository:
            def email_exists(self, email, *, exclude_id=None):
                return False

            def cpf_exists(self, cpf, *, exclude_id=None):
                return False

            def create_user(self, **fields):
                raise DuplicateUserError("cpf")

        result = CreateUserUseCase(RacingRepository()).execute(
            _create_input(make_payload)
        )

        assert result.error.code == UserErrorCode.CPF_ALREADY_EXISTS


# =============================================================================
# Login
# =============================================================================


class TestAuthenticateUser:
    def test_valid_credentials(self, repo, seed_user):
        user = seed_user(email="ana@hotel.com")

        result = AuthenticateUserUseCase(repo).execute(_login_input("ANA@hotel.com"))

        assert result.error is None
        assert result.user.id == user.id

    def test_wrong_password(self, repo, seed_user):
        seed_user(email="ana@hotel.com")

        result = AuthenticateUserUseCase(repo).execute(
            _login_input("ana@hotel.com", "errada123")
        )

        assert result.error.code == UserErrorCode.INVALID_CREDENTIALS
        assert result.error.message == "Email ou senha incorretos"

    def test_unknown_email_is_indistinguishable(self, repo):
        result = AuthenticateUserUseCase(repo).execute(_login_input("ninguem@hotel.com"))
        assert result.error.code == UserErrorCode.INVALID_CREDENTIALS

    def test_unknown_email_still_pays_argon2(self, repo, monkeypatch):
        calls = []
        monkeypatch.setattr(
            authenticate_user,
            "verify_dummy_password",
            lambda password: calls.append(password) or False,
        )

        result = AuthenticateUserUseCase(repo).execute(_login_input("ninguem@hotel.com"))

        assert result.error.code == UserErrorCode.INVALID_CREDENTIALS
        assert calls == [DEFAULT_PASSWORD]

    def test_deactivated_account_with_correct_password(self, repo, seed_user):
        user = seed_user(email="ana@hotel.com")
        repo.soft_delete_user(user.id, deleted_by=user.id)

        result = AuthenticateUserUseCase(repo).execute(_login_input("ana@hotel.com"))

        assert result.error.code == UserErrorCode.ACCOUNT_DEACTIVATED

    def test_deactivated_account_with_wrong_password(self, repo, seed_user):
        user = seed_user(email="ana@hotel.com")
        repo.soft_delete_user(user.id, deleted_by=user.id)

        result = AuthenticateUserUseCase(repo).execute(
            _login_input("ana@hotel.com", "errada123")
        )

        assert result.error.code == UserErrorCode.INVALID_CREDENTIALS

    def test_outdated_hash_is_upgraded(self, repo, seed_user):
        legacy_hash = PasswordHasher(time_cost=2, memory_cost=2048).hash(
            DEFAULT_PASSWORD
        )
        user = seed_user(email="ana@hotel.com", password_hash=legacy_hash)

        result = AuthenticateUserUseCase(repo).execute(_login_input("ana@hotel.com"))

        assert result.error is None
        stored = repo.get_user_by_id(user.id)
        assert stored.password_hash != legacy_hash
        assert verify_password(DEFAULT_PASSWORD, stored.password_hash)


# =============================================================================
# Availability
# =============================================================================


class TestCheckAvailability:
    def test_email_taken_and_free(self, repo, seed_user):
        seed_user(email="ana@hotel.com")
        use_case = CheckAvailabilityUseCase(repo)

        taken = use_case.check_email("ana@hotel.com")
        free = use_case.check_email("livre@hotel.com")

        assert taken.available is False and taken.message == "Email já está em uso"
        assert free.available is True and free.message == "Email disponível"

    def test_cpf_of_deleted_user_is_unavailable(self, repo, seed_user):
        user = seed_user(cpf=VALID_CPFS[3])
        repo.soft_delete_user(user.id, deleted_by=user.id)

        result = CheckAvailabilityUseCase(repo).check_cpf(VALID_CPFS[3])

        assert result.available is False
        assert result.message == "CPF já está cadastrado"


# =============================================================================
# Get / list / search
# =============================================================================


class TestGetUser:
    def test_active_user(self, repo, seed_user):
        user = seed_user()
        assert GetUserUseCase(repo).execute(user.id).user == user

    def test_deleted_user_is_not_found(self, repo, seed_user):
        user = seed_user()
        repo.soft_delete_user(user.id, deleted_by=user.id)

        result = GetUserUseCase(repo).execute(user.id)

        assert result.error.code == UserErrorCode.NOT_FOUND

    def test_unknown_id(self, repo):
        result = GetUserUseCase(repo).execute(uuid4())
        assert result.error.message == "Usuário não encontrado"


class TestListUsers:
    def test_pages_over_25_users(self, repo, seed_user):
        for _ in range(25):
            seed_user()
        use_case = ListUsersUseCase(repo)

        third = use_case.execute(PageParams(page=3, limit=10))
        fourth = use_case.execute(PageParams(page=4, limit=10))

        assert len(third.users) == 5
        assert third.pagination.total == 25
        assert third.pagination.total_pages == 3
        assert fourth.users == []
        assert fourth.pagination.total == 25

    def test_deleted_listing_is_disjoint(self, repo, seed_user):
        kept = seed_user()
        gone = seed_user()
        repo.soft_delete_user(gone.id, deleted_by=kept.id)
        use_case = ListUsersUseCase(repo)

        active = use_case.execute(PageParams(page=1, limit=10))
        deleted = use_case.execute_deleted(PageParams(page=1, limit=10))

        assert [u.id for u in active.users] == [kept.id]
        assert [u.id for u in deleted.users] == [gone.id]
        assert deleted.users[0].deleted_by == kept.id

    def test_empty_store(self, repo):
        result = ListUsersUseCase(repo).execute(PageParams(page=1, limit=10))
        assert result.users == []
        assert result.pagination.total_pages == 0


class TestSearchUsers:
    def test_matches_name_or_email_case_insensitive(self, repo, seed_user):
        seed_user(name="Carlos Souza", email="carlos@hotel.com")
        seed_user(name="Beatriz Lima", email="bia.souza@hotel.com")
        seed_user(name="João Pereira", email="joao@hotel.com")

        result = SearchUsersUseCase(repo).execute("SOUZA", PageParams(page=1, limit=10))

        assert {u.name for u in result.users} == {"Carlos Souza", "Beatriz Lima"}
        assert result.query == "SOUZA"
        assert result.pagination.total == 2

    def test_only_filters_the_requested_page(self, repo, seed_user):
        target = seed_user(name="Alvo Especial")
        for _ in range(3):
            seed_user()
        use_case = SearchUsersUseCase(repo)

        pages = [
            use_case.execute("especial", PageParams(page=n, limit=1)) for n in range(1, 5)
        ]

        hits = [u.id for page in pages for u in page.users]
        assert hits == [target.id]
        assert sum(1 for page in pages if not page.users) == 3
        assert sorted(page.pagination.total for page in pages) == [0, 0, 0, 1]


# =============================================================================
# Update
# =============================================================================


class TestUpdateUser:
    def test_partial_update(self, repo, seed_user):
        user = seed_user()

        result = UpdateUserUseCase(repo).execute(
            user.id, _update_input(telefone="21999998888")
        )

        assert result.user.phone == "21999998888"
        assert result.user.name == user.name
        assert result.user.email == user.email

    def test_password_is_rehashed(self, repo, seed_user):
        user = seed_user()

        result = UpdateUserUseCase(repo).execute(
            user.id, _update_input(senha="novaSenha1")
        )

        assert verify_password("novaSenha1", result.user.password_hash)
        assert not verify_password(DEFAULT_PASSWORD, result.user.password_hash)

    def test_same_email_is_not_a_conflict(self, repo, seed_user):
        user = seed_user(email="ana@hotel.com")

        result = UpdateUserUseCase(repo).execute(
            user.id, _update_input(email="ANA@hotel.com", nome="Ana Maria")
        )

        assert result.error is None
        assert result.user.name == "Ana Maria"

    def test_email_of_another_user(self, repo, seed_user):
        seed_user(email="ana@hotel.com")
        other = seed_user()

        result = UpdateUserUseCase(repo).execute(
            other.id, _update_input(email="ana@hotel.com")
        )

        assert result.error.code == UserErrorCode.EMAIL_ALREADY_EXISTS

    def test_cpf_of_another_user(self, repo, seed_user):
        seed_user(cpf=VALID_CPFS[0])
        other = seed_user()

        result = UpdateUserUseCase(repo).execute(
            other.id, _update_input(cpf=VALID_CPFS[0])
        )

        assert result.error.code == UserErrorCode.CPF_ALREADY_EXISTS

    def test_deleted_user_cannot_be_updated(self, repo, seed_user):
        user = seed_user()
        repo.soft_delete_user(user.id, deleted_by=user.id)

        result = UpdateUserUseCase(repo).execute(user.id, _update_input(nome="Novo Nome"))

        assert result.error.code == UserErrorCode.NOT_FOUND

    def test_unknown_user(self, repo):
        result = UpdateUserUseCase(repo).execute(uuid4(), _update_input(nome="Novo Nome"))
        assert result.error.code == UserErrorCode.NOT_FOUND


# =============================================================================
# Soft delete / restore
# =============================================================================


class TestSoftDeleteAndRestore:
    def test_self_delete_records_actor(self, repo, seed_user):
        user = seed_user()

        result = SoftDeleteUserUseCase(repo).execute(user.id)

        assert result.user.active is False
        assert result.user.deleted_at is not None
        assert result.user.deleted_by == user.id

    def test_delete_by_other_actor(self, repo, seed_user):
        user = seed_user()
        admin = seed_user()

        result = SoftDeleteUserUseCase(repo).execute(user.id, deleted_by=admin.id)

        assert result.user.deleted_by == admin.id

    def test_delete_twice(self, repo, seed_user):
        user = seed_user()
        use_case = SoftDeleteUserUseCase(repo)
        use_case.execute(user.id)

        result = use_case.execute(user.id)

        assert result.error.code == UserErrorCode.USER_ALREADY_DELETED
        assert result.error.message == "Usuário já está excluído"

    def test_delete_unknown(self, repo):
        result = SoftDeleteUserUseCase(repo).execute(uuid4())
        assert result.error.code == UserErrorCode.NOT_FOUND

    def test_restore_round_trip_keeps_fields(self, repo, seed_user):
        user = seed_user()
        SoftDeleteUserUseCase(repo).execute(user.id)

        result = RestoreUserUseCase(repo).execute(user.id)

        restored = result.user
        assert restored.active is True
        assert restored.deleted_at is None and restored.deleted_by is None
        assert restored.created_at == user.created_at
        assert (restored.name, restored.email, restored.cpf) == (
            user.name,
            user.email,
            user.cpf,
        )
        assert restored.password_hash == user.password_hash

    def test_restore_active_user(self, repo, seed_user):
        user = seed_user()

        result = RestoreUserUseCase(repo).execute(user.id)

        assert result.error.code == UserErrorCode.USER_ALREADY_ACTIVE
        assert result.error.message == "Usuário já está ativo"

    def test_restore_unknown(self, repo):
        result = RestoreUserUseCase(repo).execute(uuid4())
        assert result.error.code == UserErrorCode.NOT_FOUND
