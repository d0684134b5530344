"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure a hermetic test environment (memory store, cheap argon2, no .env)
  - Provide an in-memory repository and a TestClient wired to it
  - Provide request payload factories with valid CPFs

Notes:
  - Env vars are set BEFORE importing hotel_admin (the app is built on import)
  - Cached singletons (settings, hasher, repository) are cleared per test
"""

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ["APP_ENV"] = "test"
os.environ["USER_STORE"] = "memory"
os.environ["JWT_SECRET"] = "test-secret-with-enough-length-0123456789"
os.environ["PASSWORD_TIME_COST"] = "1"
os.environ["PASSWORD_MEMORY_COST_KIB"] = "1024"
os.environ["LOG_JSON"] = "false"

from hotel_admin.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from fastapi.testclient import TestClient  # noqa: E402

from hotel_admin.api.main import create_app  # noqa: E402
from hotel_admin.container import get_user_repository  # noqa: E402
from hotel_admin.identity.passwords import (  # noqa: E402
    get_password_hasher,
    hash_password,
)
from hotel_admin.infrastructure.repositories import (  # noqa: E402
    InMemoryUserRepository,
)

# CPFs con dígitos verificadores válidos.
VALID_CPFS = [
    "52998224725",
    "11144477735",
    "12345678909",
    "39053344705",
    "86288366757",
]

DEFAULT_PASSWORD = "segredo123"


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_singletons():
    app_config.get_settings.cache_clear()
    get_password_hasher.cache_clear()
    get_user_repository.cache_clear()
    yield
    app_config.get_settings.cache_clear()
    get_password_hasher.cache_clear()
    get_user_repository.cache_clear()


# ============================================================================
# Payloads
# ============================================================================


def user_payload(**overrides) -> dict:
    """Body válido para register / POST /api/users."""
    payload = {
        "nome": "Maria Silva",
        "email": "maria@hotel.com",
        "cpf": VALID_CPFS[0],
        "telefone": "11987654321",
        "endereco": "Rua das Flores, 123",
        "senha": DEFAULT_PASSWORD,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def valid_payload() -> dict:
    return user_payload()


@pytest.fixture
def make_payload():
    return user_payload


# ============================================================================
# Repository / HTTP
# ============================================================================


@pytest.fixture
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def seed_user(repo):
    """Crea usuarios directo en el repo (sin validación HTTP)."""
    counter = {"n": 0}
    password_hash = hash_password(DEFAULT_PASSWORD)

    def _seed(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "name": f"Hóspede {n:02d}",
            "email": f"hospede{n:02d}@hotel.com",
            "cpf": f"{n:011d}",
            "phone": "11987654321",
            "address": "Avenida Central, 100",
            "password_hash": password_hash,
        }
        fields.update(overrides)
        return repo.create_user(**fields)

    return _seed


@pytest.fixture
def app(repo):
    application = create_app()
    application.dependency_overrides[get_user_repository] = lambda: repo
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
