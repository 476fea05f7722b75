from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic.alias_generators import to_camel

from partner_portal.exceptions import FieldViolation, NotFound, ValidationError
from partner_portal.models import Approval, Partner, User
from partner_portal.models.base import utcnow
from partner_portal.object_storage import ObjectStorage
from partner_portal.onboarding.rules import check_interface
from partner_portal.schemas.certificate import CertificateSnapshot
from partner_portal.schemas.partner import (
    INTERFACE_FIELDS,
    SECRET_FIELDS,
    InterfaceConfig,
    InterfaceSettings,
    PartnerCreate,
    PartnerUpdate,
)
from partner_portal.services.partner_status import status_patch_error
from partner_portal.store import PortalStore


logger = logging.getLogger("portal.partners")

INTERFACE_PATH = ("interfaceConfig", "interface")
NOT_NULL_COLUMNS = frozenset(column.name for column in Partner.__table__.columns if not column.nullable)


def interface_from_partner(partner: Partner) -> dict[str, Any]:
    """Rebuild the camelCase interface block from a partner's columns."""

    merged = {field: getattr(partner, field) for field in INTERFACE_FIELDS}
    return InterfaceSettings.model_validate(merged).model_dump(mode="json", by_alias=True, exclude=set(SECRET_FIELDS))


class PartnerService:
    def __init__(
        self,
        store: PortalStore,
        *,
        document_storage: ObjectStorage | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store = store
        self.document_storage = document_storage
        self._clock = clock

    async def list_partners(self, *, user_id: UUID | None = None) -> list[Partner]:
        if user_id is not None:
            partner = await self.store.get_partner_by_user_id(user_id)
            return [partner] if partner else []
        return await self.store.list_partners()

    async def get_partner(self, partner_id: UUID) -> Partner:
        partner = await self.store.get_partner(partner_id)
        if partner is None:
            raise NotFound("Partner not found")
        return partner

    async def get_partner_for_user(self, user: User) -> Partner:
        partner = await self.store.get_partner_by_user_id(user.id)
        if partner is None:
            raise NotFound("Partner not found")
        return partner

    async def _snapshot_security(self, config: InterfaceConfig) -> dict[str, Any] | None:
        security = config.security
        if security is None:
            return None

        details = security.certificate_details
        if security.selected_certificate_id is not None and details is None:
            certificate = await self.store.get_certificate(security.selected_certificate_id)
            if certificate is None:
                raise NotFound("Certificate not found")
            details = CertificateSnapshot.model_validate(certificate)

        return {
            "selectedCertificateId": str(security.selected_certificate_id) if security.selected_certificate_id else None,
            "certificateDetails": details.model_dump(mode="json", by_alias=True) if details else None,
        }

    async def create_partner(self, payload: PartnerCreate, *, current_user: User | None = None) -> tuple[Partner, Approval]:
        """Persist a submitted onboarding request and its PENDING approval.

        The partner's status is always PENDING_APPROVAL regardless of input.
        Both rows are written in one unit of work.
        """

        owner_id = current_user.id if current_user is not None else payload.user_id
        if owner_id is None:
            raise ValidationError([FieldViolation(("userId",), "User is required")])
        if current_user is None and await self.store.get_user(owner_id) is None:
            raise NotFound("User not found")

        config = payload.interface_config or InterfaceConfig()

        if config.interface is not None:
            violations = check_interface(config.interface.rule_payload())
            if violations:
                raise ValidationError([v.prefixed(*INTERFACE_PATH) for v in violations])

        data = payload.model_dump(exclude={"interface_config", "user_id"})
        data["user_id"] = owner_id

        if config.interface is not None:
            for field, value in config.interface.model_dump().items():
                data[field] = value
        if config.resources is not None:
            data["resources"] = config.resources.model_dump(mode="json", by_alias=True)

        snapshot: dict[str, Any] = {}
        security = await self._snapshot_security(config)
        if security is not None:
            snapshot["security"] = security
        if config.review is not None:
            snapshot["review"] = config.review.model_dump(mode="json", by_alias=True)
        data["interface_config"] = snapshot or None

        now = self._clock()
        data["status"] = "PENDING_APPROVAL"
        data["submitted_at"] = now

        try:
            partner = await self.store.create_partner(data)
            approval = await self.store.create_approval(
                {
                    "partner_id": partner.id,
                    "approver_id": None,
                    "status": "PENDING",
                    "comments": "Pending review by admin",
                }
            )
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        logger.info(
            "partner_created partner_id=%s approval_id=%s partner_type=%s protocol=%s",
            partner.id,
            approval.id,
            partner.partner_type,
            partner.protocol,
        )
        return partner, approval

    async def update_partner(self, partner_id: UUID, payload: PartnerUpdate) -> Partner:
        partner = await self.get_partner(partner_id)
        data = payload.model_dump(exclude_unset=True)

        violations: list[FieldViolation] = [
            FieldViolation((to_camel(field),), "Value cannot be null")
            for field, value in data.items()
            if value is None and field in NOT_NULL_COLUMNS
        ]

        new_status = data.get("status")
        if new_status is not None:
            error = status_patch_error(partner.status, new_status)
            if error:
                violations.append(FieldViolation(("status",), error))

        if any(field in data for field in INTERFACE_FIELDS):
            merged = {field: data.get(field, getattr(partner, field)) for field in INTERFACE_FIELDS}
            violations.extend(check_interface(InterfaceSettings.model_validate(merged).rule_payload()))

        if violations:
            raise ValidationError(violations)

        try:
            updated = await self.store.update_partner(partner, data)
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        logger.info("partner_updated partner_id=%s fields=%s", partner_id, ",".join(sorted(data)))
        return updated

    async def delete_partner(self, partner_id: UUID) -> None:
        """Administrative removal: stored documents, document rows, approvals, partner."""

        await self.get_partner(partner_id)
        documents = await self.store.list_documents_for_partner(partner_id)

        if self.document_storage is not None:
            for document in documents:
                await self.document_storage.delete(document.storage_path)

        try:
            await self.store.delete_partner(partner_id)
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        logger.info("partner_deleted partner_id=%s documents=%d", partner_id, len(documents))
