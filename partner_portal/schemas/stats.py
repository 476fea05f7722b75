from __future__ import annotations

from .base import CamelModel


class StatsRead(CamelModel):
    total_partners: int
    pending_approvals: int
    approved_partners: int
    completed_this_month: int
