from __future__ import annotations

from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from partner_portal.api.deps import get_certificate_service, get_optional_user
from partner_portal.api.uploads import read_upload
from partner_portal.exceptions import AuthenticationError
from partner_portal.models import User
from partner_portal.schemas.certificate import CertificateRead
from partner_portal.services.certificate_service import CertificateService
from partner_portal.services.document_service import DEFAULT_DOCUMENT_TYPE


router = APIRouter(prefix="/certificates", tags=["certificates"])


@router.get("", response_model=list[CertificateRead])
async def list_certificates_endpoint(
    user_id: UUID | None = Query(None, alias="userId"),
    service: CertificateService = Depends(get_certificate_service),
) -> list[CertificateRead]:
    certificates = await service.list_certificates(user_id=user_id)
    return [CertificateRead.model_validate(c) for c in certificates]


@router.get("/{certificate_id}", response_model=CertificateRead)
async def get_certificate_endpoint(
    certificate_id: UUID,
    service: CertificateService = Depends(get_certificate_service),
) -> CertificateRead:
    return CertificateRead.model_validate(await service.get_certificate(certificate_id))


@router.get("/{certificate_id}/download")
async def download_certificate_endpoint(
    certificate_id: UUID,
    service: CertificateService = Depends(get_certificate_service),
) -> Response:
    certificate, data = await service.download(certificate_id)
    return Response(
        content=data,
        media_type=certificate.file_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(certificate.file_name)}"},
    )


@router.post("", response_model=CertificateRead, status_code=status.HTTP_201_CREATED)
async def upload_certificate_endpoint(
    file: UploadFile | None = File(None),
    document_type: str = Form(DEFAULT_DOCUMENT_TYPE, alias="documentType"),
    alias: str | None = Form(None),
    description: str | None = Form(None),
    user_id: UUID | None = Form(None, alias="userId"),
    user: User | None = Depends(get_optional_user),
    service: CertificateService = Depends(get_certificate_service),
) -> CertificateRead:
    owner_id = user.id if user is not None else user_id
    if owner_id is None:
        raise AuthenticationError("Not authenticated")

    data = await read_upload(file) if file is not None else b""
    certificate = await service.upload(
        user_id=owner_id,
        file_name=file.filename if file is not None else None,
        content_type=file.content_type if file is not None else None,
        data=data,
        document_type=document_type,
        alias=alias,
        description=description,
    )
    return CertificateRead.model_validate(certificate)


@router.delete("/{certificate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_certificate_endpoint(
    certificate_id: UUID,
    service: CertificateService = Depends(get_certificate_service),
) -> Response:
    await service.delete(certificate_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
