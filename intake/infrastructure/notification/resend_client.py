from __future__ import annotations

import base64
import logging
from collections.abc import Sequence

import httpx

from intake.application.dto.intake_dto import IntakeEmailAttachmentDto
from intake.application.errors import NotificationError

logger = logging.getLogger(__name__)


class ResendEmailClient:
    """Thin client for the Resend transactional e-mail endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        api_url: str,
        sender: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.sender = sender
        self.timeout = timeout
        self._transport = transport

    def send_email(
        self,
        *,
        to: Sequence[str],
        subject: str,
        html: str,
        attachments: Sequence[IntakeEmailAttachmentDto] = (),
    ) -> str:
        if not self.api_key:
            raise NotificationError("RESEND_API_KEY não configurado")

        payload: dict[str, object] = {
            "from": self.sender,
            "to": list(to),
            "subject": subject,
            "html": html,
        }
        if attachments:
            payload["attachments"] = [
                {"filename": item.filename, "content": base64.b64encode(item.content).decode("ascii")}
                for item in attachments
            ]

        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Resend API error %s: %s", exc.response.status_code, exc.response.text)
            raise NotificationError(
                f"Erro ao enviar email: {exc.response.status_code} - {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Resend request failed: %s", exc)
            raise NotificationError(f"Erro ao enviar email: {exc}") from exc

        try:
            email_id = str(response.json().get("id") or "")
        except ValueError:
            email_id = ""
        logger.info("Notification e-mail sent to %s (id=%s)", ", ".join(to), email_id or "?")
        return email_id
