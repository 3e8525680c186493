from fastapi import APIRouter, Depends, Query
from ..config import tally
from ..database import ScoreManager, get_score_manager
from ..models.response import ErrorResponse, LeaderboardResponse, LeaderboardRow
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.get("/leaderboard", response_model=LeaderboardResponse, responses={500: {"model": ErrorResponse}})
async def get_leaderboard(
    limit: int = Query(tally.leaderboard_size, ge=1, le=tally.leaderboard_size),
    manager: ScoreManager = Depends(get_score_manager)
):
    """
    Top users by score, highest first.

    - **limit**: Number of rows to return (capped at the leaderboard size)
    """
    leaders = await manager.get_leaderboard(limit)
    logger.debug(f"Leaderboard read returned {len(leaders)} rows")
    return LeaderboardResponse(
        rows=[LeaderboardRow(userId=leader.user_id, score=leader.score) for leader in leaders]
    )
