"""Tests for InMemoryJobQueue."""

import pytest

from queue_indexer.platform.indexer.protocol import JobQueue
from queue_indexer.platform.queue.memory_queue import InMemoryJobQueue
from queue_indexer.schemas.jobs import IndexingJob, RemovalJob


@pytest.mark.asyncio
async def test_jobs_are_kept_per_queue_in_order():
    """Submission order is preserved per queue name."""
    queue = InMemoryJobQueue()
    first = IndexingJob(workspace="live")
    second = RemovalJob(workspace="live")
    other = IndexingJob(workspace="user-demo")

    await queue.submit("live", first)
    await queue.submit("batch", other)
    await queue.submit("live", second)

    assert queue.jobs("live") == [first, second]
    assert queue.jobs("batch") == [other]
    assert queue.jobs("unknown") == []
    assert queue.pending_count == 3

    queue.clear()
    assert queue.pending_count == 0


def test_satisfies_job_queue_protocol():
    """The adapter can stand in wherever a JobQueue is expected."""
    assert isinstance(InMemoryJobQueue(), JobQueue)
