import asyncio
from typing import Optional
from redis.exceptions import RedisError
from ..core.exceptions import StoreUnavailable
from .connection import RedisConnection
from .score_manager import ScoreManager
from ..config import tally
from ..logger import get_logger

logger = get_logger()

class StoreManager:
    _instance = None
    _lock = asyncio.Lock()

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(StoreManager, cls).__new__(cls)
            cls._instance.connection = RedisConnection()
            cls._instance.score_manager = None
            cls._instance._initialized = False
        return cls._instance

    @classmethod
    async def get_instance(cls):
        """Get the singleton instance of StoreManager"""
        if cls._instance is None:
            async with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    async def initialize(self):
        """Connect to Redis and build the score manager"""
        if self._initialized:
            return

        try:
            await self.connection.initialize()
            self.score_manager = ScoreManager(
                self.connection.client,
                name=tally.counter_name,
                transactional=tally.transactional
            )
            self._initialized = True
            logger.info(f"Store manager initialized (counter={tally.counter_name}, transactional={tally.transactional})")
        except Exception as e:
            logger.error(f"Failed to initialize store manager: {e}")
            await self.close()
            raise

    async def close(self):
        """Close the Redis connection"""
        if self.connection:
            await self.connection.close()
        self.score_manager = None
        self._initialized = False
        # Reset the singleton instance
        StoreManager._instance = None


async def get_score_manager() -> ScoreManager:
    """FastAPI dependency returning the score manager of the running process"""
    db = await StoreManager.get_instance()
    if not db._initialized:
        try:
            await db.initialize()
        except RedisError as e:
            raise StoreUnavailable.from_error(e) from e
    return db.score_manager


async def get_optional_score_manager() -> Optional[ScoreManager]:
    """Like get_score_manager but yields None when the store cannot be reached"""
    try:
        return await get_score_manager()
    except StoreUnavailable as e:
        logger.warning(f"Score store unavailable: {e.message}")
        return None
