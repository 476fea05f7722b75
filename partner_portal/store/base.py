from __future__ import annotations

import abc
from typing import Any
from uuid import UUID

from partner_portal.models import Approval, Certificate, Document, Partner, User


class PortalStore(abc.ABC):
    """Persistence boundary for the portal's five record types.

    ``create_*`` and ``update_*`` take plain dicts keyed by model attribute
    name. Writes become durable on ``commit()``; ``rollback()`` discards the
    pending unit of work where the backend supports it.
    """

    # Users
    @abc.abstractmethod
    async def get_user(self, user_id: UUID) -> User | None: ...

    @abc.abstractmethod
    async def get_user_by_username(self, username: str) -> User | None: ...

    @abc.abstractmethod
    async def create_user(self, data: dict[str, Any]) -> User: ...

    # Partners
    @abc.abstractmethod
    async def list_partners(self) -> list[Partner]: ...

    @abc.abstractmethod
    async def get_partner(self, partner_id: UUID, *, for_update: bool = False) -> Partner | None: ...

    @abc.abstractmethod
    async def get_partner_by_user_id(self, user_id: UUID) -> Partner | None: ...

    @abc.abstractmethod
    async def create_partner(self, data: dict[str, Any]) -> Partner: ...

    @abc.abstractmethod
    async def update_partner(self, partner: Partner, data: dict[str, Any]) -> Partner: ...

    @abc.abstractmethod
    async def delete_partner(self, partner_id: UUID) -> None:
        """Remove a partner together with its documents and approvals."""

    # Documents
    @abc.abstractmethod
    async def list_documents(self) -> list[Document]: ...

    @abc.abstractmethod
    async def get_document(self, document_id: UUID) -> Document | None: ...

    @abc.abstractmethod
    async def list_documents_for_partner(self, partner_id: UUID) -> list[Document]: ...

    @abc.abstractmethod
    async def create_document(self, data: dict[str, Any]) -> Document: ...

    @abc.abstractmethod
    async def delete_document(self, document_id: UUID) -> None: ...

    # Approvals
    @abc.abstractmethod
    async def list_approvals(self, *, status: str | None = None) -> list[Approval]: ...

    @abc.abstractmethod
    async def get_approval_for_partner(self, partner_id: UUID) -> Approval | None: ...

    @abc.abstractmethod
    async def create_approval(self, data: dict[str, Any]) -> Approval: ...

    @abc.abstractmethod
    async def update_approval(self, approval: Approval, data: dict[str, Any]) -> Approval: ...

    # Certificates
    @abc.abstractmethod
    async def list_certificates(self, *, user_id: UUID | None = None) -> list[Certificate]: ...

    @abc.abstractmethod
    async def get_certificate(self, certificate_id: UUID) -> Certificate | None: ...

    @abc.abstractmethod
    async def create_certificate(self, data: dict[str, Any]) -> Certificate: ...

    @abc.abstractmethod
    async def delete_certificate(self, certificate_id: UUID) -> None: ...

    # Unit of work
    @abc.abstractmethod
    async def commit(self) -> None: ...

    @abc.abstractmethod
    async def rollback(self) -> None: ...
