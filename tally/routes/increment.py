from typing import Any, Optional
from fastapi import APIRouter, Body, Depends
from ..config import tally
from ..core.exceptions import InvalidArgument, StoreUnavailable
from ..database import ScoreManager, get_optional_score_manager
from ..models.data import build_increment
from ..models.request import IncrementRequest
from ..models.response import ErrorResponse, IncrementResponse
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.post(
    "/incr",
    response_model=IncrementResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def increment(
    body: Any = Body(None),
    manager: Optional[ScoreManager] = Depends(get_optional_score_manager)
):
    """
    Record one event for a user.

    - **userId**: Name of the user; trimmed and lower-cased
    - **amount**: Delta to add, defaults to 1 when missing or not a number
    """
    # Anything but a JSON object carries no userId
    data = IncrementRequest.model_validate(body) if isinstance(body, dict) else IncrementRequest()
    try:
        rec = build_increment(
            data.userId,
            data.amount,
            max_user_id_length=tally.max_user_id_length,
            reject_negative=tally.reject_negative_amounts
        )
    except InvalidArgument as e:
        logger.warning(f"Rejected increment: {e.message}")
        raise

    if manager is None:
        raise StoreUnavailable("Score store unavailable")

    result = await manager.increment(rec)
    logger.debug(f"Incremented {rec.user_id} by {rec.amount}: total={result.total} user={result.user_total}")
    return IncrementResponse(
        total=result.total,
        userTotal=result.user_total,
        newScore=result.new_score
    )
