from __future__ import annotations

from datetime import datetime
from uuid import UUID

from .base import CamelModel


class CertificateRead(CamelModel):
    id: UUID
    user_id: UUID

    file_name: str
    file_type: str
    file_size: int
    document_type: str

    alias: str | None = None
    description: str | None = None

    storage_path: str
    storage_url: str | None = None

    uploaded_at: datetime


class CertificateSnapshot(CamelModel):
    """Certificate metadata copied into a partner at selection time."""

    id: UUID
    file_name: str
    file_type: str | None = None
    file_size: int | None = None
    document_type: str | None = None
    alias: str | None = None
    description: str | None = None
    storage_path: str | None = None
    storage_url: str | None = None
    user_id: UUID | None = None
    uploaded_at: datetime | None = None
