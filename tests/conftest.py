import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import hospital.models  # noqa: F401
from hospital import config, db
from hospital.main import app
from hospital.services import notifications


@pytest.fixture(autouse=True)
def engine(monkeypatch):
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(test_engine)
    monkeypatch.setattr(db, "engine", test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    outbox = []

    def fake_send(to, subject, html_content):
        outbox.append({"to": to, "subject": subject, "html": html_content})
        return True

    monkeypatch.setattr(notifications, "send_email", fake_send)
    monkeypatch.setattr(config, "ADMIN_EMAIL", "admin@hospital.test")
    return outbox


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_client():
    c = TestClient(app)
    response = c.post("/api/auth/login", json={"email": config.ADMIN_LOGIN_EMAIL, "password": config.ADMIN_LOGIN_PASSWORD})
    assert response.status_code == 200
    return c


@pytest.fixture
def zoom_calls(monkeypatch):
    """Replace meeting creation with a recorder returning a fixed meeting."""
    from hospital.routes import booking

    calls = []

    async def fake_create(name, department, date, time):
        calls.append({"name": name, "department": department, "date": date, "time": time})
        return {
            "meeting_link": "https://zoom.us/j/123456789",
            "meeting_id": "123456789",
            "meeting_password": "abc123",
            "host_link": "https://zoom.us/s/123456789",
        }

    monkeypatch.setattr(booking, "create_zoom_meeting", fake_create)
    return calls


def booking_payload(**overrides):
    payload = {
        "name": "Ravi Kumar",
        "email": "ravi@example.com",
        "phone": "9876543210",
        "department": "ENT",
        "date": "2025-03-01",
        "time": "09:00 AM – 10:00 AM",
    }
    payload.update(overrides)
    return payload
