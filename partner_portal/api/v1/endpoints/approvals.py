from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from partner_portal.api.deps import get_approval_service, get_optional_user
from partner_portal.models import User
from partner_portal.schemas.approval import ApprovalDecision, ApprovalRead, ApprovalWithPartner
from partner_portal.services.approval_service import ApprovalService


router = APIRouter(prefix="/approvals", tags=["approvals"])


@router.get("", response_model=list[ApprovalRead])
async def list_approvals_endpoint(service: ApprovalService = Depends(get_approval_service)) -> list[ApprovalRead]:
    return [ApprovalRead.model_validate(a) for a in await service.list_approvals()]


@router.get("/pending", response_model=list[ApprovalWithPartner])
async def pending_approvals_endpoint(
    service: ApprovalService = Depends(get_approval_service),
) -> list[ApprovalWithPartner]:
    return await service.pending()


@router.get("/completed-this-month", response_model=list[ApprovalWithPartner])
async def completed_this_month_endpoint(
    service: ApprovalService = Depends(get_approval_service),
) -> list[ApprovalWithPartner]:
    return await service.completed_this_month()


@router.post("/{partner_id}", response_model=ApprovalRead)
async def decide_endpoint(
    partner_id: UUID,
    payload: ApprovalDecision,
    user: User | None = Depends(get_optional_user),
    service: ApprovalService = Depends(get_approval_service),
) -> ApprovalRead:
    approval = await service.decide(
        partner_id,
        payload.status,
        payload.comments,
        approver_id=user.id if user is not None else None,
    )
    return ApprovalRead.model_validate(approval)
