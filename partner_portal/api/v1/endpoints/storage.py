from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from partner_portal.api.deps import get_certificate_storage, get_document_storage
from partner_portal.object_storage import ObjectStorage


router = APIRouter(prefix="/storage", tags=["storage"])


@router.get("/health")
async def storage_health_endpoint(
    certificates: ObjectStorage = Depends(get_certificate_storage),
    documents: ObjectStorage = Depends(get_document_storage),
):
    checks = {
        "certificates": await certificates.check(),
        "documents": await documents.check(),
    }
    healthy = all(checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "ok" if healthy else "unavailable", "buckets": checks},
    )
