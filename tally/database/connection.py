import asyncio
from redis.asyncio import ConnectionPool, Redis
from ..config import redis_config
from ..logger import get_logger

logger = get_logger()

class RedisConnection:
    def __init__(self):
        self.pool = None
        self.client = None
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def initialize(self):
        """Create the Redis connection pool and check the server answers"""
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:  # Double check after acquiring lock
                return

            try:
                # No client side retries: store errors go straight to the caller
                self.pool = ConnectionPool(
                    host=redis_config.host,
                    port=redis_config.port,
                    db=redis_config.db,
                    password=redis_config.password,
                    decode_responses=True,
                    socket_timeout=redis_config.socket_timeout,
                    socket_connect_timeout=redis_config.socket_connect_timeout,
                    retry_on_timeout=False,
                    max_connections=redis_config.max_connections
                )
                self.client = Redis(connection_pool=self.pool)
                await self.client.ping()

                self._initialized = True
                logger.info(f"Redis connection initialized at {redis_config.host}:{redis_config.port}/{redis_config.db}")
            except Exception as e:
                logger.error(f"Failed to initialize Redis connection: {e}")
                await self.close()
                raise

    async def close(self):
        """Close the Redis client and its pool"""
        if self.client:
            await self.client.aclose()
            self.client = None
        if self.pool:
            await self.pool.disconnect()
            self.pool = None
        self._initialized = False
