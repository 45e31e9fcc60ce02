from datetime import datetime

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.db import build_engine, create_session_maker, init_db
from app.main import create_app
from app.services.appointment_repository import AppointmentRepository
from app.services.auth_service import Authenticator
from app.services.user_repository import UserRepository

ADMIN_EMAIL = "admin@clinic.io"
ADMIN_PASSWORD = "admin-pass-123"
SECRET_KEY = "test-secret-key"


class FakeCalendar:
    """Stands in for CalendarSyncClient; records calls, returns a fixed id or raises."""

    def __init__(self, event_id: str | None = "evt_1", error: Exception | None = None):
        self.event_id = event_id
        self.error = error
        self.calls: list[dict] = []

    async def create_event(self, name: str, email: str, start_time: datetime, notes: str | None = None):
        self.calls.append({"name": name, "email": email, "start_time": start_time, "notes": notes})
        if self.error is not None:
            raise self.error
        return self.event_id

    async def aclose(self) -> None:
        pass


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        secret_key=SECRET_KEY,
        bcrypt_rounds=4,
        env="test",
        api_prefix="/api",
        google_service_account_email="",
        google_private_key="",
        seed_admin_email=ADMIN_EMAIL,
        seed_admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def calendar() -> FakeCalendar:
    return FakeCalendar()


@pytest.fixture
def make_client(settings):
    clients = []

    def _make(calendar=None) -> TestClient:
        client = TestClient(create_app(settings, calendar=calendar))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, calendar) -> TestClient:
    return make_client(calendar)


@pytest.fixture
def admin_token(client) -> str:
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


@pytest.fixture
def admin_headers(admin_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
async def session_maker(settings):
    engine = build_engine(settings)
    await init_db(engine)
    yield create_session_maker(engine)
    await engine.dispose()


@pytest.fixture
def user_repository(session_maker) -> UserRepository:
    return UserRepository(session_maker)


@pytest.fixture
def appointment_repository(session_maker) -> AppointmentRepository:
    return AppointmentRepository(session_maker)


@pytest.fixture
def authenticator(user_repository) -> Authenticator:
    return Authenticator(user_repository, secret_key=SECRET_KEY, bcrypt_rounds=4)


@pytest.fixture(scope="session")
def rsa_private_key_pem() -> str:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
