"""
Name: User Entity Tests

Responsibilities:
  - Soft-delete state helper
  - repr never exposes the password hash
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from hotel_admin.domain.entities import User

pytestmark = pytest.mark.unit


def _user(**overrides) -> User:
    fields = dict(
        id=uuid4(),
        name="Maria Silva",
        email="maria@hotel.com",
        cpf="52998224725",
        phone="11987654321",
        address="Rua das Flores, 123",
        password_hash="$argon2id$v=19$secret-hash",
        created_at=datetime.now(timezone.utc),
    )
    fields.update(overrides)
    return User(**fields)


def test_new_user_is_active():
    user = _user()
    assert user.active is True
    assert user.is_deleted is False
    assert user.deleted_at is None and user.deleted_by is None


def test_inactive_user_is_deleted():
    user = _user(active=False, deleted_at=datetime.now(timezone.utc), deleted_by=uuid4())
    assert user.is_deleted is True


def test_repr_hides_password_hash():
    assert "argon2" not in repr(_user())


def test_user_is_immutable():
    user = _user()
    with pytest.raises(FrozenInstanceError):
        user.name = "Outro"
