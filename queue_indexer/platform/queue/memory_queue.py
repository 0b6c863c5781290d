"""In-process job queue for local development and tests."""

from collections import defaultdict
from typing import Dict, List, Union

from queue_indexer.schemas.jobs import IndexingJob, RemovalJob

QueuedJob = Union[IndexingJob, RemovalJob]


class InMemoryJobQueue:
    """Keeps submitted jobs in per-queue lists, in submission order."""

    def __init__(self) -> None:
        """Initialize empty queues."""
        self._queues: Dict[str, List[QueuedJob]] = defaultdict(list)

    async def submit(self, queue_name: str, job: QueuedJob) -> None:
        """Append a job to the named queue."""
        self._queues[queue_name].append(job)

    def jobs(self, queue_name: str) -> List[QueuedJob]:
        """Jobs submitted to ``queue_name`` so far."""
        return list(self._queues.get(queue_name, []))

    @property
    def pending_count(self) -> int:
        """Total number of jobs across all queues."""
        return sum(len(jobs) for jobs in self._queues.values())

    def clear(self) -> None:
        """Drop all queued jobs."""
        self._queues.clear()
