from __future__ import annotations

import hashlib
import json
import logging
import re
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from intake.application.dto.intake_dto import (
    IntakeEmailAttachmentDto,
    IntakeSubmissionCreateRequest,
    IntakeSubmissionDto,
    IntakeSubmissionResultDto,
)
from intake.application.errors import (
    DocumentExportError,
    PersistenceError,
    PreconditionError,
)
from intake.config import settings
from intake.domain.models.intake_form import IntakeSnapshot
from intake.domain.rules.intake_rules import normalize_birth_date, validate_submission_preconditions
from intake.infrastructure.db.repositories.audit_repo import AuditLogRepository
from intake.infrastructure.db.repositories.medical_form_repo import MedicalFormRepository
from intake.infrastructure.db.session import session_scope
from intake.infrastructure.reporting.intake_html_report import render_notification_html
from intake.infrastructure.reporting.intake_pdf_report import render_intake_pdf

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


class EmailNotifier(Protocol):
    def send_email(
        self,
        *,
        to: Sequence[str],
        subject: str,
        html: str,
        attachments: Sequence[IntakeEmailAttachmentDto] = (),
    ) -> str: ...


def pdf_filename(full_name: str) -> str:
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", full_name.strip()) or "paciente"
    return f"ficha-medica-{cleaned}.pdf"


def _optional_int(value: Any) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number or None


class IntakeService:
    def __init__(
        self,
        notifier: EmailNotifier,
        repo: MedicalFormRepository | None = None,
        audit_repo: AuditLogRepository | None = None,
        session_factory: Callable = session_scope,
        recipients: Sequence[str] | None = None,
        pdf_renderer: Callable[[Mapping[str, Any]], bytes] = render_intake_pdf,
    ) -> None:
        self.notifier = notifier
        self.repo = repo or MedicalFormRepository()
        self.audit_repo = audit_repo or AuditLogRepository()
        self.session_factory = session_factory
        self.recipients = list(recipients) if recipients is not None else [settings.notify_to]
        self.pdf_renderer = pdf_renderer

    def check_preconditions(self, snapshot: IntakeSnapshot) -> None:
        try:
            validate_submission_preconditions(snapshot)
        except ValueError as exc:
            raise PreconditionError(str(exc)) from exc

    def render_pdf(self, snapshot: IntakeSnapshot) -> bytes:
        self.check_preconditions(snapshot)
        return self._render(snapshot)

    def export_pdf(self, snapshot: IntakeSnapshot, file_path: str | Path) -> dict[str, Any]:
        content = self.render_pdf(snapshot)
        file_path = Path(file_path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(content)
        except OSError as exc:
            logger.exception("Could not write PDF to %s", file_path)
            raise DocumentExportError("Não foi possível gerar o PDF.") from exc
        digest = hashlib.sha256(content).hexdigest()
        logger.info("Intake PDF exported to %s (sha256=%s)", file_path, digest)
        return {"path": str(file_path), "sha256": digest}

    def submit(self, snapshot: IntakeSnapshot) -> IntakeSubmissionResultDto:
        self.check_preconditions(snapshot)
        request = self._build_request(snapshot)

        form_id = self._persist(request)
        content = self._render(snapshot)
        email_id = self.notifier.send_email(
            to=self.recipients,
            subject=f"Novo Formulário Médico - {request.full_name}",
            html=render_notification_html(snapshot, received_at=snapshot.taken_at),
            attachments=[IntakeEmailAttachmentDto(filename=pdf_filename(request.full_name), content=content)],
        )
        logger.info("Intake form %s submitted", form_id)
        return IntakeSubmissionResultDto(
            form_id=form_id,
            email_id=email_id or None,
            pdf_sha256=hashlib.sha256(content).hexdigest(),
        )

    def get_submission(self, form_id: str) -> IntakeSubmissionDto:
        with self.session_factory() as session:
            row = self.repo.get(session, form_id)
            if row is None:
                raise ValueError("Formulário não encontrado")
            return IntakeSubmissionDto.model_validate(self.repo.to_dict(row))

    def _build_request(self, snapshot: IntakeSnapshot) -> IntakeSubmissionCreateRequest:
        birth_date = normalize_birth_date(snapshot.get("birth_date"))
        try:
            parsed_birth = date.fromisoformat(birth_date) if birth_date else None
        except ValueError:
            parsed_birth = None
        try:
            return IntakeSubmissionCreateRequest(
                full_name=str(snapshot.get("full_name") or ""),
                birth_date=parsed_birth,
                age=_optional_int(snapshot.get("age")),
                referral_source=str(snapshot.get("referral_source") or "") or None,
                referred_by=str(snapshot.get("referred_by") or "") or None,
                form_data=snapshot.to_payload(),
            )
        except ValidationError as exc:
            raise PreconditionError(str(exc)) from exc

    def _persist(self, request: IntakeSubmissionCreateRequest) -> str:
        payload = request.model_dump(exclude={"form_data"})
        try:
            with self.session_factory() as session:
                row = self.repo.insert(session, payload=payload, form_data=request.form_data)
                form_id = str(row.id)
                self.audit_repo.add_event(
                    session,
                    entity_type="medical_form",
                    entity_id=form_id,
                    action="submit",
                    payload_json=json.dumps(
                        {"full_name": request.full_name, "submitted_at": datetime.now().isoformat()},
                        ensure_ascii=False,
                    ),
                )
        except SQLAlchemyError as exc:
            logger.exception("Could not store intake form")
            raise PersistenceError("Não foi possível enviar o formulário.") from exc
        return form_id

    def _render(self, snapshot: IntakeSnapshot) -> bytes:
        try:
            return self.pdf_renderer(snapshot)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Could not render intake PDF")
            raise DocumentExportError("Não foi possível gerar o PDF.") from exc
