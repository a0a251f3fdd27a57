from __future__ import annotations

import smtplib
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Garante que o pacote api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.app import create_app  # noqa: E402
from api.core import config as core_config  # noqa: E402
from api.core import mailer  # noqa: E402
from api.core.mailer import SendResult  # noqa: E402
from api.services import verification_service  # noqa: E402


class _FakeSMTP:
    sent = []
    fail_login = False

    def __init__(self, host, port, context=None):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def login(self, user, password):
        if _FakeSMTP.fail_login:
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")

    def sendmail(self, sender, recipients, message):
        _FakeSMTP.sent.append((sender, recipients, message))


@pytest.fixture()
def env(tmp_path, monkeypatch):
    monkeypatch.setenv("STORAGE_DIR", str(tmp_path / "storage"))
    monkeypatch.setenv("DIST_DIR", str(tmp_path / "dist"))
    monkeypatch.delenv("EMAIL_USER", raising=False)
    monkeypatch.delenv("EMAIL_APP_PASSWORD", raising=False)
    monkeypatch.delenv("SMTP_PORT", raising=False)
    _FakeSMTP.sent = []
    _FakeSMTP.fail_login = False
    monkeypatch.setattr(mailer.smtplib, "SMTP_SSL", _FakeSMTP)
    core_config.get_settings.cache_clear()
    yield monkeypatch
    core_config.get_settings.cache_clear()


def _configure_credentials(monkeypatch):
    monkeypatch.setenv("EMAIL_USER", "bot@example.com")
    monkeypatch.setenv("EMAIL_APP_PASSWORD", "secret")
    core_config.get_settings.cache_clear()


def test_send_without_credentials_is_unavailable(env):
    assert verification_service.send_verification_code("ann@example.com", "123456") is SendResult.UNAVAILABLE
    assert _FakeSMTP.sent == []


def test_send_verification_code_delivers(env):
    _configure_credentials(env)
    assert verification_service.send_verification_code("ann@example.com", "123456") is SendResult.SENT
    sender, recipients, message = _FakeSMTP.sent[0]
    assert sender == "bot@example.com"
    assert recipients == ["ann@example.com"]
    assert "Verification Code" in message
    assert "TradePilot AI" in message


def test_smtp_error_is_delivery_failure(env):
    _configure_credentials(env)
    _FakeSMTP.fail_login = True
    assert verification_service.send_verification_code("ann@example.com", "1") is SendResult.FAILED


def test_verification_template_escapes_code():
    html_body = verification_service.render_verification_email("<b>42</b>")
    assert "&lt;b&gt;42&lt;/b&gt;" in html_body


def test_endpoint_reports_unavailable_as_500(env):
    client = TestClient(create_app())
    resp = client.post("/api/send-verification-email", json={"email": "ann@example.com", "code": "123456"})
    assert resp.status_code == 500
    assert resp.json() == {"success": False}


def test_endpoint_success(env):
    _configure_credentials(env)
    client = TestClient(create_app())
    resp = client.post("/api/send-verification-email", json={"email": "ann@example.com", "code": "123456"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}


def test_endpoint_requires_email_and_code(env):
    client = TestClient(create_app())
    resp = client.post("/api/send-verification-email", json={"email": "ann@example.com"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False}


def test_health_reports_email_configuration(env):
    client = TestClient(create_app())
    assert client.get("/api/health").json() == {"status": "ok", "emailConfigured": False}
    _configure_credentials(env)
    assert client.get("/api/health").json() == {"status": "ok", "emailConfigured": True}
