import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

import pytest
from fastapi.testclient import TestClient

from gatehouse.app import create_app
from gatehouse.auth.session import SessionTokens
from gatehouse.auth.users import InMemoryUserRepository
from gatehouse.config import Settings

SECRET = "test-secret-key-0123456789abcdef-0123456789"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def settings() -> Settings:
    return Settings(secret_key=SECRET)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def tokens(clock) -> SessionTokens:
    return SessionTokens(SECRET, clock=clock)


@pytest.fixture()
def client(settings, users, tokens):
    app = create_app(settings, users=users, tokens=tokens)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def register(client):
    def _register(name="Ada Lovelace", email="ada@example.com", password="Abc123"):
        return client.post("/register", data={"name": name, "email": email, "password": password})

    return _register


@pytest.fixture()
def login(client):
    def _login(email="ada@example.com", password="Abc123", **kwargs):
        return client.post("/login", data={"email": email, "password": password}, **kwargs)

    return _login
