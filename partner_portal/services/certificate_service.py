from __future__ import annotations

import hashlib
import logging
import re
import time
from uuid import UUID

from partner_portal.exceptions import FieldViolation, NotFound, ValidationError
from partner_portal.models import Certificate
from partner_portal.object_storage import ObjectStorage
from partner_portal.services.document_service import DEFAULT_DOCUMENT_TYPE, check_upload
from partner_portal.store import PortalStore


logger = logging.getLogger("portal.certificates")

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.]")


def certificate_key(file_name: str, data: bytes, *, now_ms: int | None = None) -> str:
    """``<epoch-ms>-<md5[:8]>-<sanitized name>``; unique per upload."""

    if now_ms is None:
        now_ms = int(time.time() * 1000)
    digest = hashlib.md5(data).hexdigest()[:8]
    return f"{now_ms}-{digest}-{_UNSAFE_CHARS.sub('-', file_name)}"


class CertificateService:
    def __init__(self, store: PortalStore, storage: ObjectStorage, *, max_upload_bytes: int) -> None:
        self.store = store
        self.storage = storage
        self.max_upload_bytes = max_upload_bytes

    async def list_certificates(self, *, user_id: UUID | None = None) -> list[Certificate]:
        return await self.store.list_certificates(user_id=user_id)

    async def get_certificate(self, certificate_id: UUID) -> Certificate:
        certificate = await self.store.get_certificate(certificate_id)
        if certificate is None:
            raise NotFound("Certificate not found")
        return certificate

    async def upload(
        self,
        *,
        user_id: UUID | None,
        file_name: str | None,
        content_type: str | None,
        data: bytes,
        document_type: str | None = None,
        alias: str | None = None,
        description: str | None = None,
    ) -> Certificate:
        check_upload(file_name, data, max_bytes=self.max_upload_bytes)

        if user_id is None:
            raise ValidationError([FieldViolation(("userId",), "User is required")])
        if await self.store.get_user(user_id) is None:
            raise NotFound("User not found")

        content_type = content_type or "application/octet-stream"
        stored = await self.storage.put(certificate_key(file_name, data), data, content_type=content_type)

        try:
            certificate = await self.store.create_certificate(
                {
                    "user_id": user_id,
                    "file_name": file_name,
                    "file_type": content_type,
                    "file_size": len(data),
                    "document_type": document_type or DEFAULT_DOCUMENT_TYPE,
                    "alias": alias or None,
                    "description": description or None,
                    "storage_path": stored.path,
                    "storage_url": stored.url,
                }
            )
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            logger.exception("certificate_insert_failed user_id=%s key=%s", user_id, stored.path)
            raise

        logger.info("certificate_uploaded certificate_id=%s user_id=%s size=%d", certificate.id, user_id, len(data))
        return certificate

    async def download(self, certificate_id: UUID) -> tuple[Certificate, bytes]:
        certificate = await self.get_certificate(certificate_id)
        return certificate, await self.storage.get(certificate.storage_path)

    async def delete(self, certificate_id: UUID) -> None:
        certificate = await self.get_certificate(certificate_id)

        await self.storage.delete(certificate.storage_path)
        try:
            await self.store.delete_certificate(certificate_id)
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        logger.info("certificate_deleted certificate_id=%s", certificate_id)
