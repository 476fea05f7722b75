from __future__ import annotations

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import Field

from .base import CamelModel
from .document import DocumentRead


class ApprovalDecision(CamelModel):
    status: Literal["APPROVED", "REJECTED"]
    comments: str | None = None


class ApprovalRead(CamelModel):
    id: UUID
    partner_id: UUID
    approver_id: UUID | None = None

    status: str
    comments: str | None = None

    created_at: datetime
    updated_at: datetime


class ApprovalWithPartner(ApprovalRead):
    """Approval joined with its partner's fields and documents."""

    company_name: str = "Unknown"
    contact_name: str = "Unknown"
    contact_email: str = "Unknown"
    contact_phone: str = "Unknown"
    partner_type: str = "GENERIC"
    partner_status: str | None = None

    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    rejected_at: datetime | None = None

    interface_config: dict[str, Any] | None = None
    documents: list[DocumentRead] = Field(default_factory=list)

    is_enhanced: bool = True
