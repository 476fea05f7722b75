from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from partner_portal.exceptions import FieldViolation, NotFound, ValidationError
from partner_portal.models import Approval, Partner
from partner_portal.models.base import utcnow
from partner_portal.schemas.approval import ApprovalWithPartner
from partner_portal.schemas.document import DocumentRead
from partner_portal.services.partner_service import interface_from_partner
from partner_portal.services.stats_service import completed_in_month, local_now
from partner_portal.store import PortalStore


logger = logging.getLogger("portal.approvals")

DECISION_STATUSES = ("APPROVED", "REJECTED")


class ApprovalService:
    """Admin decisions on onboarding requests.

    A partner may be re-decided any number of times; each decision overwrites
    the single approval record and the matching partner timestamp, and never
    clears the other timestamp.
    """

    def __init__(
        self,
        store: PortalStore,
        *,
        clock: Callable[[], datetime] = utcnow,
        local_clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.store = store
        self._clock = clock
        self._local_clock = local_clock

    async def decide(
        self,
        partner_id: UUID,
        status: str,
        comments: str | None = None,
        *,
        approver_id: UUID | None = None,
    ) -> Approval:
        if status not in DECISION_STATUSES:
            raise ValidationError([FieldViolation(("status",), "Status must be APPROVED or REJECTED")])

        try:
            # Row lock on the partner serialises concurrent decisions (database store).
            partner = await self.store.get_partner(partner_id, for_update=True)
            if partner is None:
                raise NotFound("Partner not found")

            now = self._clock()
            decision = {
                "status": status,
                "comments": comments,
                "approver_id": approver_id,
                "updated_at": now,
            }

            approval = await self.store.get_approval_for_partner(partner_id)
            if approval is not None:
                approval = await self.store.update_approval(approval, decision)
            else:
                logger.info("approval_missing partner_id=%s creating", partner_id)
                approval = await self.store.create_approval({"partner_id": partner_id, **decision})

            if status == "APPROVED":
                await self.store.update_partner(partner, {"status": "APPROVED", "approved_at": now})
            else:
                await self.store.update_partner(partner, {"status": "REJECTED", "rejected_at": now})

            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        logger.info(
            "approval_decided partner_id=%s approval_id=%s status=%s approver_id=%s",
            partner_id,
            approval.id,
            status,
            approver_id,
        )
        return approval

    async def list_approvals(self) -> list[Approval]:
        return await self.store.list_approvals()

    async def _enrich(self, approval: Approval) -> ApprovalWithPartner:
        base = ApprovalWithPartner.model_validate(approval)
        partner: Partner | None = await self.store.get_partner(approval.partner_id)
        if partner is None:
            return base

        documents = await self.store.list_documents_for_partner(partner.id)
        interface_config = dict(partner.interface_config or {})
        interface_config["interface"] = interface_from_partner(partner)

        return base.model_copy(
            update={
                "company_name": partner.company_name,
                "contact_name": partner.contact_name,
                "contact_email": partner.contact_email,
                "contact_phone": partner.contact_phone,
                "partner_type": partner.partner_type,
                "partner_status": partner.status,
                "submitted_at": partner.submitted_at,
                "approved_at": partner.approved_at,
                "rejected_at": partner.rejected_at,
                "interface_config": interface_config,
                "documents": [DocumentRead.model_validate(d) for d in documents],
            }
        )

    async def pending(self) -> list[ApprovalWithPartner]:
        approvals = await self.store.list_approvals(status="PENDING")
        return [await self._enrich(a) for a in approvals]

    async def completed_this_month(self) -> list[ApprovalWithPartner]:
        approvals = await self.store.list_approvals(status="APPROVED")
        return [await self._enrich(a) for a in completed_in_month(approvals, self._local_clock())]
