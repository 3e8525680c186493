from typing import Optional
from fastapi import APIRouter, Depends, Query
from ..core.exceptions import StoreUnavailable
from ..database import ScoreManager, get_optional_score_manager
from ..models.data import normalize_user_id
from ..models.response import ErrorResponse, StatsResponse

router = APIRouter()

@router.get("/stats", response_model=StatsResponse, responses={500: {"model": ErrorResponse}})
async def get_stats(
    userId: Optional[str] = Query(None, description="User to report; zeros are returned when omitted"),
    manager: Optional[ScoreManager] = Depends(get_optional_score_manager)
):
    """Global total and the given user's total"""
    if normalize_user_id(userId) is None:
        return StatsResponse()
    if manager is None:
        raise StoreUnavailable("Score store unavailable")

    stats = await manager.get_stats(userId)
    return StatsResponse(total=stats.total, userTotal=stats.user_total)
