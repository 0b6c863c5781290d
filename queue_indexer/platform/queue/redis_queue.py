"""Redis-backed job queue.

Jobs are appended as JSON messages to a Redis list per queue name
(``{key_prefix}:{queue_name}``); workers pop from the head of the list.
"""

from typing import Optional, Union

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from queue_indexer.core.config import settings
from queue_indexer.core.logging import ContextualLogger
from queue_indexer.core.logging import logger as default_logger
from queue_indexer.platform.indexer.exceptions import QueueSubmissionError
from queue_indexer.schemas.jobs import IndexingJob, RemovalJob


class RedisJobQueue:
    """Submits jobs by pushing their JSON form onto Redis lists.

    Connection errors and timeouts are retried a bounded number of times.
    Anything that still fails is raised as QueueSubmissionError.
    """

    def __init__(
        self,
        client: Redis,
        key_prefix: Optional[str] = None,
        max_attempts: Optional[int] = None,
        retry_wait: Optional[wait_base] = None,
        logger: Optional[ContextualLogger] = None,
    ):
        """Initialize the queue.

        Args:
            client: Async Redis client
            key_prefix: Prefix of list keys (defaults to settings.REDIS_KEY_PREFIX)
            max_attempts: Attempts per submission (defaults to settings.REDIS_SUBMIT_MAX_ATTEMPTS)
            retry_wait: Tenacity wait strategy between attempts
            logger: Optional contextual logger
        """
        self._client = client
        self.key_prefix = key_prefix or settings.REDIS_KEY_PREFIX
        self.max_attempts = max_attempts or settings.REDIS_SUBMIT_MAX_ATTEMPTS
        self._retry_wait = retry_wait or wait_exponential(multiplier=0.1, max=2)
        self.logger = logger or default_logger.with_context(component="redis_job_queue")

    @classmethod
    def from_url(cls, url: Optional[str] = None, **kwargs) -> "RedisJobQueue":
        """Create a queue with a client connected to ``url`` (defaults to settings.REDIS_URL)."""
        client = Redis.from_url(url or settings.REDIS_URL, decode_responses=True)
        return cls(client, **kwargs)

    def key_for(self, queue_name: str) -> str:
        """Redis key of the list backing ``queue_name``."""
        return f"{self.key_prefix}:{queue_name}"

    async def submit(self, queue_name: str, job: Union[IndexingJob, RemovalJob]) -> None:
        """Push a job onto the named queue.

        Args:
            queue_name: Target queue
            job: Indexing or removal job

        Raises:
            QueueSubmissionError: If Redis rejects the push after all attempts
        """
        key = self.key_for(queue_name)
        message = job.to_message()

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self._retry_wait,
                retry=retry_if_exception_type((RedisConnectionError, RedisTimeoutError)),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        self.logger.warning(
                            f"Retrying push to {key} "
                            f"(attempt {attempt.retry_state.attempt_number}/{self.max_attempts})"
                        )
                    await self._client.rpush(key, message)
        except RedisError as e:
            raise QueueSubmissionError(
                f"Failed to push {job.kind} job for workspace {job.workspace} to {key}: {e}",
                queue_name=queue_name,
                workspace=job.workspace,
            ) from e

        self.logger.debug(f"Pushed {job.kind} job ({len(job.payloads)} payloads) to {key}")

    async def pending(self, queue_name: str) -> int:
        """Number of jobs waiting in the named queue."""
        return await self._client.llen(self.key_for(queue_name))

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()
