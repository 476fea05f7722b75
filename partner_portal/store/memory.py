from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar
from uuid import UUID

import sqlalchemy as sa

from partner_portal.models import Approval, Certificate, Document, Partner, User
from partner_portal.models.base import utcnow

from .base import PortalStore


TModel = TypeVar("TModel")


class InMemoryStore(PortalStore):
    """Dict-backed store holding transient ORM instances.

    There is no transaction support: writes are visible immediately and
    ``rollback()`` is a no-op.
    """

    def __init__(self, *, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self.users: dict[UUID, User] = {}
        self.partners: dict[UUID, Partner] = {}
        self.documents: dict[UUID, Document] = {}
        self.approvals: dict[UUID, Approval] = {}
        self.certificates: dict[UUID, Certificate] = {}

    def _build(self, model: type[TModel], data: dict[str, Any]) -> TModel:
        obj = model(**data)
        now = self._clock()
        for key, column in sa.inspect(model).columns.items():
            if getattr(obj, key) is not None:
                continue
            if column.primary_key:
                setattr(obj, key, uuid.uuid4())
            elif isinstance(column.type, sa.DateTime) and column.server_default is not None:
                setattr(obj, key, now)
            elif column.server_default is not None and isinstance(column.server_default.arg, str):
                setattr(obj, key, column.server_default.arg)
        return obj

    def _apply(self, obj: Any, data: dict[str, Any]) -> None:
        for field, value in data.items():
            if hasattr(obj, field):
                setattr(obj, field, value)
        if hasattr(obj, "updated_at") and "updated_at" not in data:
            obj.updated_at = self._clock()

    # Users
    async def get_user(self, user_id: UUID) -> User | None:
        return self.users.get(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self.users.values() if u.username == username), None)

    async def create_user(self, data: dict[str, Any]) -> User:
        user = self._build(User, data)
        self.users[user.id] = user
        return user

    # Partners
    async def list_partners(self) -> list[Partner]:
        return list(self.partners.values())

    async def get_partner(self, partner_id: UUID, *, for_update: bool = False) -> Partner | None:
        return self.partners.get(partner_id)

    async def get_partner_by_user_id(self, user_id: UUID) -> Partner | None:
        return next((p for p in self.partners.values() if p.user_id == user_id), None)

    async def create_partner(self, data: dict[str, Any]) -> Partner:
        partner = self._build(Partner, data)
        self.partners[partner.id] = partner
        return partner

    async def update_partner(self, partner: Partner, data: dict[str, Any]) -> Partner:
        self._apply(partner, data)
        return partner

    async def delete_partner(self, partner_id: UUID) -> None:
        for doc_id in [d.id for d in self.documents.values() if d.partner_id == partner_id]:
            del self.documents[doc_id]
        for approval_id in [a.id for a in self.approvals.values() if a.partner_id == partner_id]:
            del self.approvals[approval_id]
        self.partners.pop(partner_id, None)

    # Documents
    async def list_documents(self) -> list[Document]:
        return list(self.documents.values())

    async def get_document(self, document_id: UUID) -> Document | None:
        return self.documents.get(document_id)

    async def list_documents_for_partner(self, partner_id: UUID) -> list[Document]:
        return [d for d in self.documents.values() if d.partner_id == partner_id]

    async def create_document(self, data: dict[str, Any]) -> Document:
        document = self._build(Document, data)
        self.documents[document.id] = document
        return document

    async def delete_document(self, document_id: UUID) -> None:
        self.documents.pop(document_id, None)

    # Approvals
    async def list_approvals(self, *, status: str | None = None) -> list[Approval]:
        return [a for a in self.approvals.values() if status is None or a.status == status]

    async def get_approval_for_partner(self, partner_id: UUID) -> Approval | None:
        return next((a for a in self.approvals.values() if a.partner_id == partner_id), None)

    async def create_approval(self, data: dict[str, Any]) -> Approval:
        approval = self._build(Approval, data)
        self.approvals[approval.id] = approval
        return approval

    async def update_approval(self, approval: Approval, data: dict[str, Any]) -> Approval:
        self._apply(approval, data)
        return approval

    # Certificates
    async def list_certificates(self, *, user_id: UUID | None = None) -> list[Certificate]:
        return [c for c in self.certificates.values() if user_id is None or c.user_id == user_id]

    async def get_certificate(self, certificate_id: UUID) -> Certificate | None:
        return self.certificates.get(certificate_id)

    async def create_certificate(self, data: dict[str, Any]) -> Certificate:
        certificate = self._build(Certificate, data)
        self.certificates[certificate.id] = certificate
        return certificate

    async def delete_certificate(self, certificate_id: UUID) -> None:
        self.certificates.pop(certificate_id, None)

    async def commit(self) -> None:
        return None

    async def rollback(self) -> None:
        return None
