from __future__ import annotations

from partner_portal.models.partner import PARTNER_STATUSES


STATUS_CHAIN = PARTNER_STATUSES
TERMINAL_STATUSES = frozenset({"APPROVED", "REJECTED"})


def status_patch_error(old_status: str, new_status: str) -> str | None:
    """Return why a partial update may not move ``old_status`` to ``new_status``.

    Updates only move forward along DRAFT -> SUBMITTED -> PENDING_APPROVAL.
    APPROVED / REJECTED are entered through the approval workflow only, so
    the partner and its approval record stay in step.
    """

    if new_status == old_status:
        return None
    if new_status in TERMINAL_STATUSES:
        return "Partners are approved or rejected through the approval workflow"
    if old_status in TERMINAL_STATUSES:
        return f"Invalid status transition: {old_status} -> {new_status}"
    if STATUS_CHAIN.index(new_status) < STATUS_CHAIN.index(old_status):
        return f"Invalid status transition: {old_status} -> {new_status}"
    return None
