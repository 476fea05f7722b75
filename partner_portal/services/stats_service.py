"""Dashboard counts, recomputed from full scans on every call."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from partner_portal.models import Approval, Partner
from partner_portal.schemas.stats import StatsRead
from partner_portal.store import PortalStore


def local_now() -> datetime:
    return datetime.now().astimezone()


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def completed_in_month(approvals: Iterable[Approval], now: datetime) -> list[Approval]:
    """APPROVED approvals last updated between the first of ``now``'s month and ``now``."""

    month_start = start_of_month(now)
    return [
        a
        for a in approvals
        if a.status == "APPROVED" and a.updated_at is not None and month_start <= _aware(a.updated_at) <= now
    ]


def compute_stats(partners: Iterable[Partner], approvals: Iterable[Approval], *, now: datetime) -> StatsRead:
    partners = list(partners)
    return StatsRead(
        total_partners=len(partners),
        pending_approvals=sum(1 for p in partners if p.status == "PENDING_APPROVAL"),
        approved_partners=sum(1 for p in partners if p.status == "APPROVED"),
        completed_this_month=len(completed_in_month(approvals, now)),
    )


class StatsService:
    def __init__(self, store: PortalStore, *, clock: Callable[[], datetime] = local_now) -> None:
        self.store = store
        self._clock = clock

    async def get_stats(self) -> StatsRead:
        partners = await self.store.list_partners()
        approvals = await self.store.list_approvals()
        return compute_stats(partners, approvals, now=self._clock())
