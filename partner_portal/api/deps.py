from __future__ import annotations

from functools import lru_cache
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from partner_portal.config import settings
from partner_portal.database import get_db
from partner_portal.exceptions import AuthenticationError
from partner_portal.models import User
from partner_portal.object_storage import ObjectStorage, certificate_storage, document_storage
from partner_portal.services.approval_service import ApprovalService
from partner_portal.services.certificate_service import CertificateService
from partner_portal.services.document_service import DocumentService
from partner_portal.services.partner_service import PartnerService
from partner_portal.services.stats_service import StatsService
from partner_portal.services.user_service import UserService
from partner_portal.store import DatabaseStore, InMemoryStore, PortalStore


@lru_cache(maxsize=None)
def memory_store() -> InMemoryStore:
    """Process-wide store used when ``STORE_BACKEND=memory``."""

    return InMemoryStore()


async def get_store(session: AsyncSession = Depends(get_db)) -> PortalStore:
    if settings.store_backend == "memory":
        return memory_store()
    return DatabaseStore(session)


def get_certificate_storage() -> ObjectStorage:
    return certificate_storage()


def get_document_storage() -> ObjectStorage:
    return document_storage()


async def _lookup_user(store: PortalStore, raw_id: str | None) -> User | None:
    if not raw_id:
        return None
    try:
        user_id = UUID(raw_id)
    except ValueError:
        raise AuthenticationError("Invalid user id")

    user = await store.get_user(user_id)
    if user is None:
        raise AuthenticationError("Unknown user")
    return user


async def get_optional_user(
    x_user_id: str | None = Header(None),
    store: PortalStore = Depends(get_store),
) -> User | None:
    """Resolve the caller from ``X-User-Id``; anonymous when the header is absent."""

    return await _lookup_user(store, x_user_id)


async def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise AuthenticationError("Not authenticated")
    return user


def get_partner_service(
    store: PortalStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_document_storage),
) -> PartnerService:
    return PartnerService(store, document_storage=storage)


def get_document_service(
    store: PortalStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_document_storage),
) -> DocumentService:
    return DocumentService(store, storage, max_upload_bytes=settings.max_upload_bytes)


def get_certificate_service(
    store: PortalStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_certificate_storage),
) -> CertificateService:
    return CertificateService(store, storage, max_upload_bytes=settings.max_upload_bytes)


def get_approval_service(store: PortalStore = Depends(get_store)) -> ApprovalService:
    return ApprovalService(store)


def get_stats_service(store: PortalStore = Depends(get_store)) -> StatsService:
    return StatsService(store)


def get_user_service(store: PortalStore = Depends(get_store)) -> UserService:
    return UserService(store)
