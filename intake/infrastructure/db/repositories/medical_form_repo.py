from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any
from uuid import uuid4

from sqlalchemy.orm import Session

from intake.infrastructure.db import models_sqlalchemy as models


def _to_json(value: object, *, default: str) -> str:
    if value is None:
        return default
    return json.dumps(value, ensure_ascii=False, default=str)


def _from_json(value: object, *, default: object) -> object:
    if value is None:
        return default
    if isinstance(value, (list, dict)):
        return value
    try:
        return json.loads(str(value))
    except Exception:  # noqa: BLE001
        return default


def _parse_date(value: object) -> date | None:
    if value is None:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, datetime):
        return value.date()
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


class MedicalFormRepository:
    def insert(
        self,
        session: Session,
        *,
        payload: dict[str, Any],
        form_data: dict[str, Any],
        form_id: str | None = None,
    ) -> models.MedicalForm:
        row = models.MedicalForm(
            id=form_id or str(uuid4()),
            created_at=models.utc_now(),
            full_name=str(payload.get("full_name") or ""),
            birth_date=_parse_date(payload.get("birth_date")),
            age=payload.get("age"),
            referral_source=payload.get("referral_source"),
            referred_by=payload.get("referred_by"),
            form_data_json=_to_json(form_data, default="{}"),
        )
        session.add(row)
        session.flush()
        return row

    def get(self, session: Session, form_id: str) -> models.MedicalForm | None:
        return session.get(models.MedicalForm, form_id)

    def to_dict(self, row: models.MedicalForm) -> dict[str, Any]:
        return {
            "id": str(row.id),
            "created_at": row.created_at,
            "full_name": str(row.full_name),
            "birth_date": row.birth_date,
            "age": row.age,
            "referral_source": row.referral_source,
            "referred_by": row.referred_by,
            "form_data": _from_json(row.form_data_json, default={}),
        }
