from __future__ import annotations

from datetime import datetime
from uuid import UUID

from .base import CamelModel


class DocumentRead(CamelModel):
    id: UUID
    partner_id: UUID

    file_name: str
    file_type: str
    file_size: int
    document_type: str
    storage_path: str

    uploaded_at: datetime
