from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class RedisConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='REDIS_')

    host: str = 'localhost'
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    socket_timeout: float = 5.0
    socket_connect_timeout: float = 5.0
    max_connections: int = 50

redis_config = RedisConfig()

class TallyConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='TALLY_')

    counter_name: str = 'bananas'
    leaderboard_size: int = 20
    # Unlimited unless set
    max_user_id_length: Optional[int] = None
    # Apply the three writes of an increment inside MULTI/EXEC
    transactional: bool = False
    reject_negative_amounts: bool = False
    log_level: str = 'INFO'
    host: str = '0.0.0.0'
    port: int = 8000
    workers: int = 1

tally = TallyConfig()
