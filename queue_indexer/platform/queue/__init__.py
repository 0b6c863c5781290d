"""Job queue adapters implementing the JobQueue protocol."""

from queue_indexer.platform.queue.memory_queue import InMemoryJobQueue
from queue_indexer.platform.queue.redis_queue import RedisJobQueue

__all__ = [
    "InMemoryJobQueue",
    "RedisJobQueue",
]
