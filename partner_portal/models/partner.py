from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


PARTNER_STATUSES = ("DRAFT", "SUBMITTED", "PENDING_APPROVAL", "APPROVED", "REJECTED")


class Partner(Base):
    __tablename__ = "partners"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_phone: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # GENERIC partner profile
    business_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    primary_goals: Mapped[str | None] = mapped_column(Text, nullable=True)
    resources: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    partner_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, server_default="DRAFT")

    # Interface configuration, populated conditionally on protocol / auth type.
    protocol: Mapped[str | None] = mapped_column(String(20), nullable=True)
    auth_type: Mapped[str | None] = mapped_column(String(30), nullable=True)
    direction: Mapped[str | None] = mapped_column(String(20), nullable=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    http_header_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    api_key_value: Mapped[str | None] = mapped_column(String(512), nullable=True)
    identity_key_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    host: Mapped[str | None] = mapped_column(String(255), nullable=True)
    port: Mapped[str | None] = mapped_column(String(10), nullable=True)
    character_encoding: Mapped[str | None] = mapped_column(String(50), nullable=True)
    source_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    support_format_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    file_name_pattern: Mapped[str | None] = mapped_column(String(255), nullable=True)
    archival_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    additional_settings: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    endpoints: Mapped[list | None] = mapped_column(JSONB, nullable=True)

    # Snapshot of the security/review steps at submission time (certificate
    # metadata is copied, not referenced).
    interface_config: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow, server_default=func.now())
