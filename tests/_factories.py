from __future__ import annotations

import uuid
from typing import Any

from partner_portal.models import User
from partner_portal.schemas.user import UserCreate
from partner_portal.services.user_service import UserService
from partner_portal.store import PortalStore


SFTP_BASIC_INTERFACE: dict[str, Any] = {
    "protocol": "sftp",
    "authType": "basic",
    "direction": "inbound",
    "username": "acme",
    "password": "s3cret",
    "host": "sftp.acme.example",
    "port": 22,
    "characterEncoding": "UTF-8",
    "sourcePath": "/out",
    "supportFormatType": "X12",
    "fileNamePattern": "*.edi",
    "archivalPath": "/archive",
}


async def make_user(store: PortalStore, username: str | None = None, *, role: str = "partner") -> User:
    username = username or f"user-{uuid.uuid4().hex[:8]}"
    return await UserService(store).create_user(
        UserCreate(
            username=username,
            password="password123",
            full_name=username.title(),
            email=f"{username}@example.com",
            role=role,
        )
    )


def b2b_payload(*, user_id: uuid.UUID | None = None, interface: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "companyName": "Acme Corp",
        "contactName": "Jane Doe",
        "contactEmail": "jane@acme.example",
        "contactPhone": "555-010-2000",
        "partnerType": "B2B_EDI",
        "interfaceConfig": {
            "security": {"selectedCertificateId": None},
            "interface": dict(SFTP_BASIC_INTERFACE if interface is None else interface),
            "review": {"acceptTerms": True},
        },
    }
    if user_id is not None:
        payload["userId"] = str(user_id)
    return payload
