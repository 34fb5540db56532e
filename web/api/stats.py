from fastapi import APIRouter, Depends
from typing import Dict, Any

from services.stats_service import StatsService
from ..dependencies import get_stats_service

router = APIRouter(prefix="/api/stats", tags=["statistics"])


@router.get("/summary", response_model=Dict[str, Any])
async def get_summary(service: StatsService = Depends(get_stats_service)):
    """
    Сводная статистика для дашборда: задачи, фокус-время, привычки
    """
    return service.get_summary()
