from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class IntakeSubmissionCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(min_length=1)
    birth_date: date | None = None
    age: int | None = None
    referral_source: str | None = None
    referred_by: str | None = None
    form_data: dict[str, Any] = Field(default_factory=dict)


class IntakeSubmissionDto(BaseModel):
    id: str
    created_at: datetime
    full_name: str
    birth_date: date | None = None
    age: int | None = None
    referral_source: str | None = None
    referred_by: str | None = None
    form_data: dict[str, Any] = Field(default_factory=dict)


class IntakeEmailAttachmentDto(BaseModel):
    filename: str
    content: bytes


class IntakeSubmissionResultDto(BaseModel):
    form_id: str
    email_id: str | None = None
    pdf_sha256: str
