from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from partner_portal.api.deps import get_current_user, get_user_service
from partner_portal.models import User
from partner_portal.schemas.user import ExternalIdentity, LoginRequest, LoginResponse, UserRead
from partner_portal.services.user_service import UserService


logger = logging.getLogger("portal.auth")

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login_endpoint(
    payload: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> LoginResponse:
    user = await service.authenticate(payload.username, payload.password)
    logger.info("login user_id=%s role=%s", user.id, user.role)
    return LoginResponse(user=UserRead.model_validate(user))


@router.post("/external", response_model=LoginResponse)
async def external_login_endpoint(
    payload: ExternalIdentity,
    service: UserService = Depends(get_user_service),
) -> LoginResponse:
    """Exchange an identity established by the external provider for a local user."""

    user = await service.upsert_external(payload)
    return LoginResponse(user=UserRead.model_validate(user))


@router.get("/me", response_model=UserRead)
async def me_endpoint(user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(user)


@router.post("/logout")
async def logout_endpoint() -> dict:
    return {"message": "Logged out successfully"}
