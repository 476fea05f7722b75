import uuid
from datetime import datetime, timedelta, timezone

import pytest

from partner_portal.exceptions import NotFound, ValidationError
from partner_portal.schemas.partner import PartnerCreate
from partner_portal.services.approval_service import ApprovalService
from partner_portal.services.partner_service import PartnerService

from tests._factories import b2b_payload, make_user


class StepClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


async def _submitted_partner(store):
    user = await make_user(store)
    partner, approval = await PartnerService(store).create_partner(
        PartnerCreate.model_validate(b2b_payload()), current_user=user
    )
    return partner, approval


@pytest.mark.anyio
async def test_approve_then_reject_keeps_approved_at(store):
    partner, _ = await _submitted_partner(store)
    clock = StepClock(datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc))
    service = ApprovalService(store, clock=clock)

    await service.decide(partner.id, "APPROVED", "Looks good")
    approved_at = partner.approved_at
    assert partner.status == "APPROVED"
    assert approved_at is not None

    approval = await service.decide(partner.id, "REJECTED", "Certificate expired")

    assert partner.status == "REJECTED"
    assert partner.rejected_at is not None
    assert partner.rejected_at > approved_at
    assert partner.approved_at == approved_at
    assert approval.status == "REJECTED"
    assert approval.comments == "Certificate expired"
    assert len(await store.list_approvals()) == 1


@pytest.mark.anyio
async def test_decide_records_approver(store):
    partner, _ = await _submitted_partner(store)
    admin = await make_user(store, "reviewer", role="admin")

    approval = await ApprovalService(store).decide(partner.id, "APPROVED", approver_id=admin.id)

    assert approval.approver_id == admin.id


@pytest.mark.anyio
async def test_decide_creates_missing_approval(store):
    user = await make_user(store)
    partner = await store.create_partner(
        {
            "user_id": user.id,
            "company_name": "Legacy Ltd",
            "contact_name": "Sam",
            "contact_email": "sam@legacy.example",
            "contact_phone": "555-000-1111",
            "partner_type": "GENERIC",
            "status": "PENDING_APPROVAL",
        }
    )

    approval = await ApprovalService(store).decide(partner.id, "APPROVED")

    assert approval.partner_id == partner.id
    assert await store.get_approval_for_partner(partner.id) is approval


@pytest.mark.anyio
async def test_decide_unknown_partner(store):
    with pytest.raises(NotFound):
        await ApprovalService(store).decide(uuid.uuid4(), "APPROVED")


@pytest.mark.anyio
async def test_decide_rejects_pending_as_decision(store):
    partner, _ = await _submitted_partner(store)
    with pytest.raises(ValidationError):
        await ApprovalService(store).decide(partner.id, "PENDING")


@pytest.mark.anyio
async def test_pending_is_enriched_with_partner_and_documents(store):
    partner, _ = await _submitted_partner(store)
    await store.create_document(
        {
            "partner_id": partner.id,
            "file_name": "w9.pdf",
            "file_type": "application/pdf",
            "file_size": 10,
            "document_type": "tax",
            "storage_path": "tax/x/w9.pdf",
        }
    )

    [row] = await ApprovalService(store).pending()

    assert row.company_name == "Acme Corp"
    assert row.status == "PENDING"
    assert row.partner_status == "PENDING_APPROVAL"
    assert row.interface_config["interface"]["host"] == "sftp.acme.example"
    assert row.interface_config["review"] == {"acceptTerms": True}
    assert [d.file_name for d in row.documents] == ["w9.pdf"]
    assert row.is_enhanced is True
