"""
Name: In-Memory User Repository Tests

Responsibilities:
  - Active/deleted filters and include_deleted lookups
  - Uniqueness across all rows (DuplicateUserError)
  - Guarded soft delete / restore transitions
  - Stable ordering and exact totals in list_users
"""

from uuid import uuid4

import pytest

from hotel_admin.crosscutting.exceptions import DuplicateUserError
from hotel_admin.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit


def _create(repo: InMemoryUserRepository, n: int, **overrides):
    fields = dict(
        name=f"Hóspede {n}",
        email=f"h{n}@hotel.com",
        cpf=f"{n:011d}",
        phone="11987654321",
        address="Rua A, 1",
        password_hash="hash",
    )
    fields.update(overrides)
    return repo.create_user(**fields)


class TestCreateAndLookup:
    def test_new_user_is_active(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        assert user.active is True
        assert repo.get_user_by_id(user.id) == user

    def test_email_lookup_is_case_insensitive(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        assert repo.get_user_by_email("H1@HOTEL.COM") == user

    def test_duplicate_email_raises(self):
        repo = InMemoryUserRepository()
        _create(repo, 1)
        with pytest.raises(DuplicateUserError) as exc_info:
            _create(repo, 2, email="H1@hotel.com")
        assert exc_info.value.field == "email"

    def test_duplicate_cpf_raises(self):
        repo = InMemoryUserRepository()
        _create(repo, 1)
        with pytest.raises(DuplicateUserError) as exc_info:
            _create(repo, 2, cpf=f"{1:011d}")
        assert exc_info.value.field == "cpf"

    def test_uniqueness_includes_deleted_rows(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        repo.soft_delete_user(user.id, deleted_by=user.id)
        assert repo.email_exists("h1@hotel.com") is True
        assert repo.cpf_exists(user.cpf) is True
        with pytest.raises(DuplicateUserError):
            _create(repo, 2, email="h1@hotel.com")

    def test_exists_excluding_self(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        assert repo.email_exists("h1@hotel.com", exclude_id=user.id) is False


class TestTransitions:
    def test_soft_delete_hides_from_default_lookups(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        actor = uuid4()

        deleted = repo.soft_delete_user(user.id, deleted_by=actor)

        assert deleted.active is False
        assert deleted.deleted_by == actor
        assert deleted.deleted_at is not None
        assert repo.get_user_by_id(user.id) is None
        assert repo.get_user_by_id(user.id, include_deleted=True) == deleted

    def test_soft_delete_twice_returns_none(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        repo.soft_delete_user(user.id, deleted_by=user.id)
        assert repo.soft_delete_user(user.id, deleted_by=user.id) is None

    def test_restore_clears_deletion_fields(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        repo.soft_delete_user(user.id, deleted_by=user.id)

        restored = repo.restore_user(user.id)

        assert restored.active is True
        assert restored.deleted_at is None and restored.deleted_by is None
        assert restored.created_at == user.created_at
        assert restored.email == user.email

    def test_restore_active_returns_none(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        assert repo.restore_user(user.id) is None

    def test_unknown_id_returns_none(self):
        repo = InMemoryUserRepository()
        assert repo.soft_delete_user(uuid4(), deleted_by=uuid4()) is None
        assert repo.restore_user(uuid4()) is None


class TestUpdate:
    def test_partial_update(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        updated = repo.update_user(user.id, {"phone": "21999998888"})
        assert updated.phone == "21999998888"
        assert updated.name == user.name

    def test_update_deleted_user_returns_none(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        repo.soft_delete_user(user.id, deleted_by=user.id)
        assert repo.update_user(user.id, {"name": "Outro"}) is None

    def test_update_rejects_unknown_columns(self):
        repo = InMemoryUserRepository()
        user = _create(repo, 1)
        with pytest.raises(ValueError):
            repo.update_user(user.id, {"active": False})

    def test_update_to_taken_email_raises(self):
        repo = InMemoryUserRepository()
        _create(repo, 1)
        other = _create(repo, 2)
        with pytest.raises(DuplicateUserError):
            repo.update_user(other.id, {"email": "h1@hotel.com"})


class TestListing:
    def test_totals_and_pages(self):
        repo = InMemoryUserRepository()
        for n in range(1, 26):
            _create(repo, n)

        page, total = repo.list_users(active=True, limit=10, offset=20)
        assert total == 25
        assert len(page) == 5

        page, total = repo.list_users(active=True, limit=10, offset=30)
        assert page == [] and total == 25

    def test_newest_first(self):
        repo = InMemoryUserRepository()
        users = [_create(repo, n) for n in range(1, 4)]
        page, _ = repo.list_users(active=True, limit=10, offset=0)
        created = [u.created_at for u in page]
        assert created == sorted(created, reverse=True)
        assert {u.id for u in page} == {u.id for u in users}

    def test_active_and_deleted_are_disjoint(self):
        repo = InMemoryUserRepository()
        keep = _create(repo, 1)
        gone = _create(repo, 2)
        repo.soft_delete_user(gone.id, deleted_by=keep.id)

        active, active_total = repo.list_users(active=True, limit=10, offset=0)
        deleted, deleted_total = repo.list_users(active=False, limit=10, offset=0)

        assert [u.id for u in active] == [keep.id] and active_total == 1
        assert [u.id for u in deleted] == [gone.id] and deleted_total == 1
