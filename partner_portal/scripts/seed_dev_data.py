"""Development seed data.

Idempotent: safe to run multiple times.

Usage:
  DATABASE_URL=postgresql+asyncpg://... python -m partner_portal.scripts.seed_dev_data

The in-memory store is seeded through the same function when
``STORE_BACKEND=memory``.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass

from partner_portal.models.base import utcnow
from partner_portal.schemas.user import UserCreate
from partner_portal.services.user_service import UserService
from partner_portal.store import PortalStore


logger = logging.getLogger("portal.seed")


@dataclass(frozen=True)
class SeedResult:
    admin_user_id: uuid.UUID
    partner_user_id: uuid.UUID
    sample_partner_id: uuid.UUID


SEED_USERS = (
    UserCreate(
        username="admin",
        password="admin123",
        full_name="Admin User",
        email="admin@example.com",
        role="admin",
    ),
    UserCreate(
        username="partner",
        password="partner123",
        full_name="Partner User",
        email="partner@example.com",
        role="partner",
        company_name="Sample Partner Inc.",
    ),
)

SAMPLE_INTERFACE = {
    "protocol": "sftp",
    "authType": "basic",
    "direction": "inbound",
    "username": "sample",
    "password": "sample-password",
    "host": "sftp.samplepartner.example",
    "port": "22",
    "characterEncoding": "UTF-8",
    "sourcePath": "/outbound",
    "supportFormatType": "X12",
    "fileNamePattern": "*.edi",
    "archivalPath": "/archive",
}


async def _get_or_create_user(users: UserService, seed_user: UserCreate) -> uuid.UUID:
    existing = await users.store.get_user_by_username(seed_user.username)
    if existing is not None:
        return existing.id
    return (await users.create_user(seed_user)).id


async def seed_dev_data(store: PortalStore) -> SeedResult:
    """Seed the admin and partner users and one pending B2B_EDI partner.

    Creates:
      - admin / admin123 (role admin)
      - partner / partner123 (role partner)
      - "Sample Partner Inc." owned by the partner user, PENDING_APPROVAL,
        with one PENDING approval
    """

    users = UserService(store)
    admin_id = await _get_or_create_user(users, SEED_USERS[0])
    partner_user_id = await _get_or_create_user(users, SEED_USERS[1])

    partner = await store.get_partner_by_user_id(partner_user_id)
    if partner is None:
        now = utcnow()
        try:
            partner = await store.create_partner(
                {
                    "user_id": partner_user_id,
                    "company_name": "Sample Partner Inc.",
                    "contact_name": "Partner User",
                    "contact_email": "partner@example.com",
                    "contact_phone": "555-123-4567",
                    "address": "123 Partner St",
                    "city": "Partnerville",
                    "state": "CA",
                    "zip_code": "12345",
                    "country": "USA",
                    "industry": "Technology",
                    "partner_type": "B2B_EDI",
                    "status": "PENDING_APPROVAL",
                    "protocol": SAMPLE_INTERFACE["protocol"],
                    "auth_type": SAMPLE_INTERFACE["authType"],
                    "direction": SAMPLE_INTERFACE["direction"],
                    "username": SAMPLE_INTERFACE["username"],
                    "password": SAMPLE_INTERFACE["password"],
                    "host": SAMPLE_INTERFACE["host"],
                    "port": SAMPLE_INTERFACE["port"],
                    "character_encoding": SAMPLE_INTERFACE["characterEncoding"],
                    "source_path": SAMPLE_INTERFACE["sourcePath"],
                    "support_format_type": SAMPLE_INTERFACE["supportFormatType"],
                    "file_name_pattern": SAMPLE_INTERFACE["fileNamePattern"],
                    "archival_path": SAMPLE_INTERFACE["archivalPath"],
                    "interface_config": {
                        "security": {"selectedCertificateId": None, "certificateDetails": None},
                        "interface": SAMPLE_INTERFACE,
                        "review": {"acceptTerms": True},
                    },
                    "submitted_at": now,
                }
            )
            await store.create_approval(
                {"partner_id": partner.id, "status": "PENDING", "comments": "Pending review by admin"}
            )
            await store.commit()
        except Exception:
            await store.rollback()
            raise

    logger.info("seeded admin_user_id=%s partner_user_id=%s partner_id=%s", admin_id, partner_user_id, partner.id)
    return SeedResult(admin_user_id=admin_id, partner_user_id=partner_user_id, sample_partner_id=partner.id)


async def _main() -> SeedResult:
    from partner_portal.database import SessionLocal
    from partner_portal.store import DatabaseStore

    async with SessionLocal() as session:
        return await seed_dev_data(DatabaseStore(session))


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    result = asyncio.run(_main())
    print(
        "Seeded:",
        f"admin_user_id={result.admin_user_id}",
        f"partner_user_id={result.partner_user_id}",
        f"sample_partner_id={result.sample_partner_id}",
    )


if __name__ == "__main__":
    main()
