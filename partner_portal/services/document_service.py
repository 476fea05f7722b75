from __future__ import annotations

import logging
import os
import uuid
from uuid import UUID

from partner_portal.exceptions import NotFound, UploadRejected, UploadTooLarge
from partner_portal.models import Document
from partner_portal.object_storage import ObjectStorage
from partner_portal.store import PortalStore


logger = logging.getLogger("portal.documents")

DEFAULT_DOCUMENT_TYPE = "certificate"


def check_upload(file_name: str | None, data: bytes, *, max_bytes: int) -> None:
    if not file_name:
        raise UploadRejected("No file uploaded")
    if len(data) > max_bytes:
        raise UploadTooLarge(max_bytes)


class DocumentService:
    def __init__(self, store: PortalStore, storage: ObjectStorage, *, max_upload_bytes: int) -> None:
        self.store = store
        self.storage = storage
        self.max_upload_bytes = max_upload_bytes

    async def list_documents(self, *, partner_id: UUID | None = None) -> list[Document]:
        if partner_id is not None:
            return await self.store.list_documents_for_partner(partner_id)
        return await self.store.list_documents()

    async def get_document(self, document_id: UUID) -> Document:
        document = await self.store.get_document(document_id)
        if document is None:
            raise NotFound("Document not found")
        return document

    async def upload(
        self,
        partner_id: UUID,
        *,
        file_name: str | None,
        content_type: str | None,
        data: bytes,
        document_type: str | None = None,
    ) -> Document:
        check_upload(file_name, data, max_bytes=self.max_upload_bytes)

        if await self.store.get_partner(partner_id) is None:
            raise NotFound("Partner not found")

        document_type = document_type or DEFAULT_DOCUMENT_TYPE
        extension = os.path.splitext(file_name)[1]
        key = f"{document_type}/{partner_id}/{uuid.uuid4()}{extension}"
        content_type = content_type or "application/octet-stream"

        stored = await self.storage.put(key, data, content_type=content_type)

        # NOTE: no compensation if the insert fails; the object stays orphaned.
        try:
            document = await self.store.create_document(
                {
                    "partner_id": partner_id,
                    "file_name": file_name,
                    "file_type": content_type,
                    "file_size": len(data),
                    "document_type": document_type,
                    "storage_path": stored.path,
                }
            )
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            logger.exception("document_insert_failed partner_id=%s key=%s", partner_id, key)
            raise

        logger.info("document_uploaded document_id=%s partner_id=%s size=%d", document.id, partner_id, len(data))
        return document

    async def delete(self, document_id: UUID) -> None:
        document = await self.get_document(document_id)

        await self.storage.delete(document.storage_path)
        try:
            await self.store.delete_document(document_id)
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        logger.info("document_deleted document_id=%s partner_id=%s", document_id, document.partner_id)
