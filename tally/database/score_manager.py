import asyncio
from typing import List, Optional
from redis.exceptions import RedisError
from ..core.exceptions import StoreUnavailable
from ..models.data import IncrementRec, IncrementResult, Leader, StatsResult, as_number, normalize_user_id
from ..logger import get_logger
from . import keys

logger = get_logger()

class ScoreManager:
    """
    Counter and leaderboard operations against Redis.

    An increment touches three keys: the global counter, the user's counter
    and the user's member in the leaderboard sorted set. Each command is
    atomic on its own key. Unless ``transactional`` is set the three are not
    applied as one unit, so a concurrent reader may see some of them before
    the others. Nothing is cached between calls and nothing is retried.
    """

    def __init__(self, redis, name: str = "bananas", transactional: bool = False):
        self.redis = redis
        self.name = name
        self.transactional = transactional
        self.global_key = keys.global_key(name)
        self.leaderboard_key = keys.leaderboard_key(name)

    async def increment(self, rec: IncrementRec) -> IncrementResult:
        """Add rec.amount to the global counter, the user counter and the leaderboard"""
        user_key = keys.user_key(self.name, rec.user_id)
        try:
            if self.transactional:
                async with self.redis.pipeline(transaction=True) as pipe:
                    pipe.incrby(self.global_key, rec.amount)
                    pipe.incrby(user_key, rec.amount)
                    pipe.zincrby(self.leaderboard_key, rec.amount, rec.user_id)
                    total, user_total, new_score = await pipe.execute()
            else:
                # Let both writes settle before reporting a failure
                results = await asyncio.gather(
                    self.redis.incrby(self.global_key, rec.amount),
                    self.redis.incrby(user_key, rec.amount),
                    return_exceptions=True
                )
                for result in results:
                    if isinstance(result, BaseException):
                        raise result
                total, user_total = results
                new_score = await self.redis.zincrby(self.leaderboard_key, rec.amount, rec.user_id)
        except RedisError as e:
            logger.error(f"Increment failed for {rec.user_id} by {rec.amount}: {e}")
            raise StoreUnavailable.from_error(e) from e

        return IncrementResult(
            total=as_number(total),
            user_total=as_number(user_total),
            new_score=as_number(new_score)
        )

    async def get_stats(self, user_id: Optional[str]) -> StatsResult:
        """Read the global total and one user's total; zeros when no user is given"""
        normalized = normalize_user_id(user_id)
        if normalized is None:
            return StatsResult()

        try:
            # Two point reads, not a snapshot
            total, user_total = await asyncio.gather(
                self.redis.get(self.global_key),
                self.redis.get(keys.user_key(self.name, normalized))
            )
        except RedisError as e:
            logger.error(f"Stats read failed for {normalized}: {e}")
            raise StoreUnavailable.from_error(e) from e

        return StatsResult(total=as_number(total), user_total=as_number(user_total))

    async def get_leaderboard(self, limit: int = 20) -> List[Leader]:
        """Top ``limit`` users by score, highest first"""
        if limit < 1:
            return []

        try:
            rows = await self.redis.zrevrange(self.leaderboard_key, 0, limit - 1, withscores=True)
        except RedisError as e:
            logger.error(f"Leaderboard read failed: {e}")
            raise StoreUnavailable.from_error(e) from e

        return [Leader(str(member), as_number(score)) for member, score in rows]

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False
