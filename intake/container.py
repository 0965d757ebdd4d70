from __future__ import annotations

from dataclasses import dataclass

from intake.application.services.intake_service import IntakeService
from intake.config import settings
from intake.infrastructure.db.repositories.audit_repo import AuditLogRepository
from intake.infrastructure.db.repositories.medical_form_repo import MedicalFormRepository
from intake.infrastructure.db.session import session_scope
from intake.infrastructure.notification.resend_client import ResendEmailClient


@dataclass
class Container:
    medical_form_repo: MedicalFormRepository
    audit_repo: AuditLogRepository
    email_client: ResendEmailClient

    intake_service: IntakeService


def build_container() -> Container:
    medical_form_repo = MedicalFormRepository()
    audit_repo = AuditLogRepository()
    email_client = ResendEmailClient(
        api_key=settings.resend_api_key,
        api_url=settings.resend_api_url,
        sender=settings.notify_from,
        timeout=settings.http_timeout,
    )
    intake_service = IntakeService(
        notifier=email_client,
        repo=medical_form_repo,
        audit_repo=audit_repo,
        session_factory=session_scope,
        recipients=[settings.notify_to],
    )
    return Container(
        medical_form_repo=medical_form_repo,
        audit_repo=audit_repo,
        email_client=email_client,
        intake_service=intake_service,
    )
