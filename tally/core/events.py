from redis.exceptions import RedisError
from ..database import StoreManager
from ..logger import get_logger
import asyncio

logger = get_logger()

async def startup_event():
    """Connect to the score store; if Redis is down, serve anyway and connect on first use"""
    try:
        db = await StoreManager.get_instance()
        await db.initialize()
        logger.info("Score store initialized")
    except RedisError as e:
        logger.error(f"Score store unreachable at startup, will retry on first request: {e}")
    except Exception as e:
        logger.error(f"Failed to initialize score store: {e}")
        raise

async def shutdown_event():
    """Close score store connections"""
    db = await StoreManager.get_instance()
    try:
        async with asyncio.timeout(5.0):
            await db.close()
            logger.info("Score store connections closed")
    except asyncio.TimeoutError:
        logger.warning("Shutdown timed out, connections may not be closed cleanly")
    except asyncio.CancelledError:
        logger.warning("Shutdown was cancelled before connections were closed")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")
