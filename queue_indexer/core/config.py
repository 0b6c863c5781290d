"""Process-wide settings for queue-indexer.

Values are read from the environment (and an optional ``.env`` file) once, at
import time. Indexing behavior itself is configured per coordinator through
``queue_indexer.platform.indexer.config.IndexerConfig``.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Ambient settings shared by every component.

    Attributes:
        LOG_LEVEL: Root log level for queue-indexer loggers
        LOCAL_DEVELOPMENT: Use human-readable log lines instead of JSON
        REDIS_URL: Connection URL used by the Redis job queue adapter
        REDIS_KEY_PREFIX: Prefix for Redis list keys holding queued jobs
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    LOG_LEVEL: str = "INFO"
    LOCAL_DEVELOPMENT: bool = False
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY_PREFIX: str = "queue_indexer:jobs"
    REDIS_SUBMIT_MAX_ATTEMPTS: int = Field(3, gt=0)
    SERVICE_NAME: Optional[str] = "queue-indexer"


settings = Settings()
