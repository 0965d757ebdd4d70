from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Column, Date, DateTime, Index, Integer, MetaData, String, Text
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql import expression

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=naming_convention)


class Base(DeclarativeBase):
    metadata = metadata


def utc_now() -> datetime:
    return datetime.now(UTC)


class AuditLog(Base):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True)
    event_ts = Column(DateTime, nullable=False, default=utc_now)
    entity_type = Column(String, nullable=False)
    entity_id = Column(String, nullable=False)
    action = Column(String, nullable=False)
    payload_json = Column(Text, nullable=True)


class MedicalForm(Base):
    __tablename__ = "medical_forms"

    id = Column(String(36), primary_key=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    # Top-level columns for listing without JSON traversal; the full record is form_data_json.
    full_name = Column(String, nullable=False)
    birth_date = Column(Date)
    age = Column(Integer)
    referral_source = Column(String)
    referred_by = Column(String)
    form_data_json = Column(Text, nullable=False, server_default=expression.literal("{}"))

    __table_args__ = (Index("ix_medical_forms_created_at", "created_at"),)
