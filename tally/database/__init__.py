from .base import StoreManager, get_optional_score_manager, get_score_manager
from .score_manager import ScoreManager

__all__ = ["StoreManager", "ScoreManager", "get_score_manager", "get_optional_score_manager"]
