"""Unit tests for the SendGrid email helper utilities."""

from __future__ import annotations

import json
import types

import pytest

from app.infrastructure import email as email_module


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "sender@college.edu"


class SuccessfulClient:
    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        return types.SimpleNamespace(status_code=202, body=None)


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    class UnconfiguredSettings:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: UnconfiguredSettings())

    assert email_module.send_email("Subject", "<p>Body</p>", "user@college.edu") is False


def test_send_email_success(monkeypatch: pytest.MonkeyPatch) -> None:
    """A successful SendGrid response should return ``True``."""

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", SuccessfulClient)

    assert email_module.send_email("Subject", "<p>Body</p>", "user@college.edu") is True


def test_send_email_rejected_status(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class RejectingClient(SuccessfulClient):
        def send(self, message):
            return types.SimpleNamespace(
                status_code=400, body=json.dumps({"errors": [{"message": "Bad sender"}]})
            )

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@college.edu")

    assert result is False
    assert "status 400: Bad sender" in caplog.text


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {
                "errors": [
                    {
                        "message": "The provided authorization grant is invalid.",
                        "help": "https://sendgrid.com/docs/for-developers/sending-email/authentication/",
                    }
                ]
            }
        ).encode()

    class FailingClient(SuccessfulClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@college.edu")

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_templates_escape_user_values() -> None:
    content = email_module.render_fee_reminder("<Sam>", {"amount": "<b>500</b>"})

    assert "&lt;Sam&gt;" in content.html
    assert "<b>500</b>" not in content.html
    assert content.subject == "Fee payment reminder"
