from fastapi import APIRouter

from partner_portal.api.v1.endpoints.approvals import router as approvals_router
from partner_portal.api.v1.endpoints.auth import router as auth_router
from partner_portal.api.v1.endpoints.certificates import router as certificates_router
from partner_portal.api.v1.endpoints.documents import router as documents_router
from partner_portal.api.v1.endpoints.partners import router as partners_router
from partner_portal.api.v1.endpoints.stats import router as stats_router
from partner_portal.api.v1.endpoints.storage import router as storage_router

router = APIRouter()


@router.get("/ping")
async def ping():
    return {"ping": "pong"}


router.include_router(partners_router)
router.include_router(documents_router)
router.include_router(approvals_router)
router.include_router(stats_router)
router.include_router(certificates_router)
router.include_router(auth_router)
router.include_router(storage_router)
