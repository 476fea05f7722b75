from fastapi import APIRouter, Depends

from partner_portal.api.deps import get_stats_service
from partner_portal.schemas.stats import StatsRead
from partner_portal.services.stats_service import StatsService


router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=StatsRead)
async def stats_endpoint(service: StatsService = Depends(get_stats_service)) -> StatsRead:
    return await service.get_stats()
