from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from partner_portal.api.deps import get_current_user, get_optional_user, get_partner_service
from partner_portal.models import User
from partner_portal.schemas.partner import PartnerCreate, PartnerRead, PartnerUpdate
from partner_portal.services.partner_service import PartnerService


router = APIRouter(prefix="/partners", tags=["partners"])


@router.get("", response_model=list[PartnerRead])
async def list_partners_endpoint(
    user_id: UUID | None = Query(None, alias="userId", description="Only the partner owned by this user"),
    service: PartnerService = Depends(get_partner_service),
) -> list[PartnerRead]:
    partners = await service.list_partners(user_id=user_id)
    return [PartnerRead.model_validate(p) for p in partners]


@router.get("/me", response_model=PartnerRead)
async def my_partner_endpoint(
    user: User = Depends(get_current_user),
    service: PartnerService = Depends(get_partner_service),
) -> PartnerRead:
    return PartnerRead.model_validate(await service.get_partner_for_user(user))


@router.get("/{partner_id}", response_model=PartnerRead)
async def get_partner_endpoint(
    partner_id: UUID,
    service: PartnerService = Depends(get_partner_service),
) -> PartnerRead:
    return PartnerRead.model_validate(await service.get_partner(partner_id))


@router.post("", response_model=PartnerRead, status_code=status.HTTP_201_CREATED)
async def create_partner_endpoint(
    payload: PartnerCreate,
    user: User | None = Depends(get_optional_user),
    service: PartnerService = Depends(get_partner_service),
) -> PartnerRead:
    partner, _approval = await service.create_partner(payload, current_user=user)
    return PartnerRead.model_validate(partner)


@router.patch("/{partner_id}", response_model=PartnerRead)
async def update_partner_endpoint(
    partner_id: UUID,
    payload: PartnerUpdate,
    service: PartnerService = Depends(get_partner_service),
) -> PartnerRead:
    return PartnerRead.model_validate(await service.update_partner(partner_id, payload))


@router.delete("/{partner_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_partner_endpoint(
    partner_id: UUID,
    service: PartnerService = Depends(get_partner_service),
) -> Response:
    await service.delete_partner(partner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
