from __future__ import annotations

import base64
import json

import httpx
import pytest

from intake.application.dto.intake_dto import IntakeEmailAttachmentDto
from intake.application.errors import NotificationError
from intake.infrastructure.notification.resend_client import ResendEmailClient

API_URL = "https://api.resend.test/emails"


def _client(handler, api_key: str = "re_test") -> ResendEmailClient:
    return ResendEmailClient(
        api_key=api_key,
        api_url=API_URL,
        sender="Formulário Médico <onboarding@resend.dev>",
        transport=httpx.MockTransport(handler),
    )


def test_send_email_posts_payload_with_bearer_key() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"id": "email-123"})

    email_id = _client(handler).send_email(
        to=["consultorio@example.com"],
        subject="Novo Formulário Médico - Maria",
        html="<p>ok</p>",
        attachments=[IntakeEmailAttachmentDto(filename="ficha-medica-Maria.pdf", content=b"%PDF-1.4")],
    )

    assert email_id == "email-123"
    assert len(captured) == 1
    request = captured[0]
    assert str(request.url) == API_URL
    assert request.headers["Authorization"] == "Bearer re_test"
    body = json.loads(request.content)
    assert body["to"] == ["consultorio@example.com"]
    assert body["subject"] == "Novo Formulário Médico - Maria"
    assert body["attachments"][0]["filename"] == "ficha-medica-Maria.pdf"
    assert base64.b64decode(body["attachments"][0]["content"]) == b"%PDF-1.4"


def test_send_email_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, text="invalid from")

    with pytest.raises(NotificationError, match="422"):
        _client(handler).send_email(to=["a@example.com"], subject="s", html="h")


def test_send_email_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(NotificationError):
        _client(handler).send_email(to=["a@example.com"], subject="s", html="h")


def test_send_email_requires_api_key() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(NotificationError, match="RESEND_API_KEY"):
        _client(handler, api_key="").send_email(to=["a@example.com"], subject="s", html="h")
