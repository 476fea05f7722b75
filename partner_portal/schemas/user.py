from __future__ import annotations

from typing import Literal
from uuid import UUID

from .base import CamelModel


class UserRead(CamelModel):
    id: UUID
    username: str
    full_name: str
    email: str
    role: str
    company_name: str | None = None


class UserCreate(CamelModel):
    username: str
    password: str
    full_name: str
    email: str
    role: Literal["admin", "partner"] = "partner"
    company_name: str | None = None


class LoginRequest(CamelModel):
    username: str
    password: str


class ExternalIdentity(CamelModel):
    """Identity asserted by the external provider after its redirect flow."""

    account_id: str
    username: str
    name: str | None = None


class LoginResponse(CamelModel):
    user: UserRead
