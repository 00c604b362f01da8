import asyncio
import json

import httpx
import pytest

from hospital import config
from hospital.services import mailer, storage, zoom
from hospital.services.storage import StorageError
from hospital.services.zoom import ZoomError


@pytest.fixture
def zoom_credentials(monkeypatch):
    monkeypatch.setattr(config, "ZOOM_ACCOUNT_ID", "acct")
    monkeypatch.setattr(config, "ZOOM_CLIENT_ID", "client")
    monkeypatch.setattr(config, "ZOOM_CLIENT_SECRET", "secret")
    monkeypatch.setattr(config, "ZOOM_TIMEZONE", "Asia/Kolkata")


def use_transport(monkeypatch, handler):
    real_client = httpx.AsyncClient

    def client_factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(zoom.httpx, "AsyncClient", client_factory)


def test_zoom_meeting_uses_slot_start_and_duration(monkeypatch, zoom_credentials):
    requests = []

    def handler(request):
        requests.append(request)
        if request.url.path == "/oauth/token":
            return httpx.Response(200, json={"access_token": "tok"})
        return httpx.Response(201, json={"id": 987, "join_url": "https://zoom.us/j/987", "password": "pw", "start_url": "https://zoom.us/s/987"})

    use_transport(monkeypatch, handler)
    meeting = asyncio.run(zoom.create_zoom_meeting("Ravi", "ENT", "2025-03-01", "05:00 PM – 06:30 PM"))

    assert meeting == {
        "meeting_link": "https://zoom.us/j/987",
        "meeting_id": "987",
        "meeting_password": "pw",
        "host_link": "https://zoom.us/s/987",
    }
    token_request, meeting_request = requests
    assert b"grant_type=account_credentials" in token_request.content
    assert meeting_request.headers["Authorization"] == "Bearer tok"
    body = json.loads(meeting_request.content)
    assert body["start_time"] == "2025-03-01T17:00:00"
    assert body["duration"] == 90
    assert body["timezone"] == "Asia/Kolkata"
    assert body["topic"] == "ENT Consultation - Ravi"


def test_zoom_token_failure(monkeypatch, zoom_credentials):
    use_transport(monkeypatch, lambda request: httpx.Response(401, json={"reason": "invalid client"}))
    with pytest.raises(ZoomError):
        asyncio.run(zoom.create_zoom_meeting("Ravi", "ENT", "2025-03-01", "09:00 AM – 10:00 AM"))


def test_zoom_missing_credentials(monkeypatch):
    monkeypatch.setattr(config, "ZOOM_ACCOUNT_ID", None)
    with pytest.raises(ZoomError):
        asyncio.run(zoom.create_zoom_meeting("Ravi", "ENT", "2025-03-01", "09:00 AM – 10:00 AM"))


def test_upload_image_returns_public_url(monkeypatch):
    stored = []

    class FakeS3:
        def put_object(self, **kwargs):
            stored.append(kwargs)

    monkeypatch.setattr(config, "STORAGE_ACCESS_KEY_ID", "key")
    monkeypatch.setattr(config, "STORAGE_SECRET_ACCESS_KEY", "secret")
    monkeypatch.setattr(config, "STORAGE_PUBLIC_URL", "https://cdn.example.com/")
    monkeypatch.setattr(config, "STORAGE_BUCKET", "hospital")
    monkeypatch.setattr(storage, "get_storage_client", lambda: FakeS3())

    url = storage.upload_image(b"png-bytes", "Banner.PNG", "image/png", "hero")

    assert url.startswith("https://cdn.example.com/hero/")
    assert url.endswith(".png")
    assert stored[0]["Bucket"] == "hospital"
    assert stored[0]["ContentType"] == "image/png"
    assert url.endswith(stored[0]["Key"])


def test_upload_image_rejects_other_types():
    with pytest.raises(StorageError):
        storage.upload_image(b"%PDF", "report.pdf", "application/pdf", "hero")


def test_upload_image_unconfigured(monkeypatch):
    monkeypatch.setattr(config, "STORAGE_ACCESS_KEY_ID", None)
    with pytest.raises(StorageError):
        storage.upload_image(b"png", "a.png", "image/png", "hero")


def test_send_email_skipped_without_smtp(monkeypatch):
    monkeypatch.setattr(config, "EMAIL_USER", None)
    monkeypatch.setattr(config, "EMAIL_PASS", None)
    assert mailer.send_email("p@example.com", "Hi", "<p>Hi</p>") is False


def test_send_email_over_starttls(monkeypatch):
    sessions = []

    class FakeSMTP:
        def __init__(self, host, port, timeout=None):
            self.host, self.port = host, port
            self.calls = []
            sessions.append(self)

        def starttls(self, context=None):
            self.calls.append("starttls")

        def login(self, user, password):
            self.calls.append(("login", user))

        def sendmail(self, sender, recipients, message):
            self.calls.append(("sendmail", recipients))

        def quit(self):
            self.calls.append("quit")

    monkeypatch.setattr(config, "EMAIL_USER", "desk@hospital.test")
    monkeypatch.setattr(config, "EMAIL_PASS", "pw")
    monkeypatch.setattr(config, "SMTP_HOST", "smtp.hospital.test")
    monkeypatch.setattr(config, "SMTP_PORT", 587)
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)

    assert mailer.send_email("p@example.com", "Hi", "<p>Hi</p>") is True
    assert sessions[0].calls == ["starttls", ("login", "desk@hospital.test"), ("sendmail", ["p@example.com"]), "quit"]


def test_zoom_token_page_that_is_not_json(monkeypatch, zoom_credentials):
    use_transport(monkeypatch, lambda request: httpx.Response(200, text="<html>maintenance</html>"))
    with pytest.raises(ZoomError):
        asyncio.run(zoom.create_zoom_meeting("Ravi", "ENT", "2025-03-01", "09:00 AM – 10:00 AM"))


def test_zoom_meeting_without_join_url(monkeypatch, zoom_credentials):
    def handler(request):
        if request.url.path == "/oauth/token":
            return httpx.Response(200, json={"access_token": "tok"})
        return httpx.Response(201, json={"message": "queued"})

    use_transport(monkeypatch, handler)
    with pytest.raises(ZoomError):
        asyncio.run(zoom.create_zoom_meeting("Ravi", "ENT", "2025-03-01", "09:00 AM – 10:00 AM"))
