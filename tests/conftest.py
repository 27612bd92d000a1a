import pytest
from fastapi.testclient import TestClient

from bookhub.core.config import reset_settings
from bookhub.di.container import reset_container
from bookhub.infrastructure.security.password_hasher import PasswordHasher
from tests.fakes import InMemoryBookRepository, InMemoryLoanRepository, InMemoryUserRepository


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    # Each test gets its own SQLite file and a fresh settings/container pair
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'bookhub_test.db'}")
    monkeypatch.setenv("TIMEZONE", "UTC")
    monkeypatch.setenv("PASSWORD_HASH_ROUNDS", "1000")
    monkeypatch.setenv("JWT_SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("JWT_ISSUER", "bookhub-test")
    monkeypatch.setenv("ADMIN_EMAIL", "")
    monkeypatch.setenv("ADMIN_PASSWORD", "")
    reset_settings()
    reset_container()
    yield
    reset_container()
    reset_settings()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=1000)


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def book_repo():
    return InMemoryBookRepository()


@pytest.fixture
def loan_repo(user_repo, book_repo):
    return InMemoryLoanRepository(user_repo, book_repo)


@pytest.fixture
def client():
    from bookhub.main import app
    
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    payload = {"name": "Ada Lovelace", "email": "ada@example.com", "password": "analytical"}
    response = client.post("/api/v1/users", json=payload)
    assert response.status_code == 201
    return {**response.json(), "password": payload["password"]}


@pytest.fixture
def auth_headers(client, registered_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
