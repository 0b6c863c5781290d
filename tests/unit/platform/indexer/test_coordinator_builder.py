"""Tests for CoordinatorBuilder wiring."""

from unittest.mock import MagicMock

import pytest

from queue_indexer.platform.indexer.builder import CoordinatorBuilder
from queue_indexer.platform.indexer.config import BulkLimits, IndexerConfig
from queue_indexer.platform.indexer.coordinator import DispatchCoordinator


def test_build_uses_bulk_indexer_limits_by_default(bulk_indexer, job_queue, mock_logger):
    """Without configured bulk limits the bulk indexer's limits drive the policy."""
    bulk_indexer.max_bulk_elements = 42
    bulk_indexer.max_bulk_bytes = 4200

    coordinator = CoordinatorBuilder.build(
        bulk_indexer, job_queue, config=IndexerConfig(queue_batch_size=10), logger=mock_logger
    )

    assert isinstance(coordinator, DispatchCoordinator)
    assert coordinator.policy.queue_batch_size == 10
    assert coordinator.policy.max_bulk_elements == 42
    assert coordinator.policy.max_bulk_bytes == 4200
    mock_logger.info.assert_called_once()


def test_build_with_explicit_limits(bulk_indexer, job_queue, mock_logger):
    """Configured limits win."""
    config = IndexerConfig(bulk=BulkLimits(elements=3, octets=30))

    coordinator = CoordinatorBuilder.build(
        bulk_indexer, job_queue, config=config, logger=mock_logger
    )

    assert coordinator.policy.max_bulk_elements == 3
    assert coordinator.config is config


def test_build_logs_synchronous_mode(bulk_indexer, job_queue, mock_logger):
    """The synchronous mode is reported at construction."""
    CoordinatorBuilder.build(
        bulk_indexer, job_queue, config=IndexerConfig.synchronous(), logger=mock_logger
    )

    [call] = mock_logger.info.call_args_list
    assert "async indexing disabled" in call.args[0]


@pytest.mark.asyncio
async def test_built_coordinator_uses_default_resolver(bulk_indexer, job_queue, new_node):
    """The default resolver reads persistence_object_identifier from node data."""
    coordinator = CoordinatorBuilder.build(
        bulk_indexer, job_queue, config=IndexerConfig(queue_batch_size=1), logger=MagicMock()
    )

    await coordinator.index_node(new_node("a"))

    [job] = job_queue.jobs(coordinator.config.queue_name)
    assert job.payloads[0].persistence_object_identifier == "poid-a"
