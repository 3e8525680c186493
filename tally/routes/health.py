import time
from typing import Optional
from fastapi import APIRouter, Depends
from ..database import ScoreManager, get_optional_score_manager
from ..models.response import HealthResponse
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

# Track application start time
start_time = time.time()

@router.get("/health", response_model=HealthResponse)
@router.head("/health")
async def health_check(manager: Optional[ScoreManager] = Depends(get_optional_score_manager)):
    """Health check endpoint, reports whether Redis answers a ping"""
    store = "up" if manager is not None and await manager.ping() else "down"
    response = HealthResponse(uptime=time.time() - start_time, store=store)
    logger.debug(f"Health check response: {response.model_dump()}")
    return response
