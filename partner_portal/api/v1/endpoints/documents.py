from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from partner_portal.api.deps import get_document_service
from partner_portal.api.uploads import read_upload
from partner_portal.schemas.document import DocumentRead
from partner_portal.services.document_service import DEFAULT_DOCUMENT_TYPE, DocumentService


router = APIRouter(tags=["documents"])


@router.get("/documents", response_model=list[DocumentRead])
async def list_documents_endpoint(service: DocumentService = Depends(get_document_service)) -> list[DocumentRead]:
    return [DocumentRead.model_validate(d) for d in await service.list_documents()]


@router.get("/documents/{document_id}", response_model=DocumentRead)
async def get_document_endpoint(
    document_id: UUID,
    service: DocumentService = Depends(get_document_service),
) -> DocumentRead:
    return DocumentRead.model_validate(await service.get_document(document_id))


@router.delete("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document_endpoint(
    document_id: UUID,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    await service.delete(document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/partners/{partner_id}/documents", response_model=list[DocumentRead])
async def list_partner_documents_endpoint(
    partner_id: UUID,
    service: DocumentService = Depends(get_document_service),
) -> list[DocumentRead]:
    return [DocumentRead.model_validate(d) for d in await service.list_documents(partner_id=partner_id)]


@router.post(
    "/partners/{partner_id}/documents",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
)
async def upload_document_endpoint(
    partner_id: UUID,
    file: UploadFile | None = File(None),
    document_type: str = Form(DEFAULT_DOCUMENT_TYPE, alias="documentType"),
    service: DocumentService = Depends(get_document_service),
) -> DocumentRead:
    data = await read_upload(file) if file is not None else b""
    document = await service.upload(
        partner_id,
        file_name=file.filename if file is not None else None,
        content_type=file.content_type if file is not None else None,
        data=data,
        document_type=document_type,
    )
    return DocumentRead.model_validate(document)
