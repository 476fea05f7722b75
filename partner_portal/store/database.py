from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from partner_portal.crud.base import BaseCRUD
from partner_portal.models import Approval, Certificate, Document, Partner, User

from .base import PortalStore


users = BaseCRUD(User)
partners = BaseCRUD(Partner)
documents = BaseCRUD(Document)
approvals = BaseCRUD(Approval)
certificates = BaseCRUD(Certificate)


class DatabaseStore(PortalStore):
    """SQLAlchemy-backed store bound to one AsyncSession (one request)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # Users
    async def get_user(self, user_id: UUID) -> User | None:
        return await users.get(self.session, id=user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        return await users.get_by(self.session, username=username)

    async def create_user(self, data: dict[str, Any]) -> User:
        return await users.create(self.session, obj_in=data)

    # Partners
    async def list_partners(self) -> list[Partner]:
        return await partners.get_multi(self.session, order_by="created_at")

    async def get_partner(self, partner_id: UUID, *, for_update: bool = False) -> Partner | None:
        return await partners.get(self.session, id=partner_id, for_update=for_update)

    async def get_partner_by_user_id(self, user_id: UUID) -> Partner | None:
        return await partners.get_by(self.session, user_id=user_id)

    async def create_partner(self, data: dict[str, Any]) -> Partner:
        return await partners.create(self.session, obj_in=data)

    async def update_partner(self, partner: Partner, data: dict[str, Any]) -> Partner:
        return await partners.update(self.session, db_obj=partner, obj_in=data)

    async def delete_partner(self, partner_id: UUID) -> None:
        # Foreign keys cascade as well; explicit deletes keep the identity map in step.
        await documents.delete_where(self.session, partner_id=partner_id)
        await approvals.delete_where(self.session, partner_id=partner_id)
        await partners.delete(self.session, id=partner_id)

    # Documents
    async def list_documents(self) -> list[Document]:
        return await documents.get_multi(self.session, order_by="uploaded_at")

    async def get_document(self, document_id: UUID) -> Document | None:
        return await documents.get(self.session, id=document_id)

    async def list_documents_for_partner(self, partner_id: UUID) -> list[Document]:
        return await documents.get_multi(self.session, filters={"partner_id": partner_id}, order_by="uploaded_at")

    async def create_document(self, data: dict[str, Any]) -> Document:
        return await documents.create(self.session, obj_in=data)

    async def delete_document(self, document_id: UUID) -> None:
        await documents.delete(self.session, id=document_id)

    # Approvals
    async def list_approvals(self, *, status: str | None = None) -> list[Approval]:
        return await approvals.get_multi(self.session, filters={"status": status}, order_by="created_at")

    async def get_approval_for_partner(self, partner_id: UUID) -> Approval | None:
        return await approvals.get_by(self.session, partner_id=partner_id)

    async def create_approval(self, data: dict[str, Any]) -> Approval:
        return await approvals.create(self.session, obj_in=data)

    async def update_approval(self, approval: Approval, data: dict[str, Any]) -> Approval:
        return await approvals.update(self.session, db_obj=approval, obj_in=data)

    # Certificates
    async def list_certificates(self, *, user_id: UUID | None = None) -> list[Certificate]:
        return await certificates.get_multi(self.session, filters={"user_id": user_id}, order_by="uploaded_at")

    async def get_certificate(self, certificate_id: UUID) -> Certificate | None:
        return await certificates.get(self.session, id=certificate_id)

    async def create_certificate(self, data: dict[str, Any]) -> Certificate:
        return await certificates.create(self.session, obj_in=data)

    async def delete_certificate(self, certificate_id: UUID) -> None:
        await certificates.delete(self.session, id=certificate_id)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
