"""Unit test conftest: environment defaults and shared fakes."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set environment before importing queue_indexer modules so Settings picks it up
os.environ.setdefault("LOCAL_DEVELOPMENT", "true")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from queue_indexer.platform.indexer.config import BulkLimits, IndexerConfig  # noqa: E402
from queue_indexer.platform.indexer.coordinator import DispatchCoordinator  # noqa: E402
from queue_indexer.platform.indexer.projector import AttributeIdentifierResolver  # noqa: E402
from queue_indexer.platform.queue.memory_queue import InMemoryJobQueue  # noqa: E402


@dataclass
class FakeNodeData:
    """Persisted node data; identifier is None until persisted."""

    persistence_object_identifier: Optional[str] = None


@dataclass
class FakeNode:
    """Minimal node satisfying the NodeReference protocol."""

    identifier: str
    workspace_name: str = "live"
    node_type: str = "Acme.Site:Document"
    path: str = "/sites/acme/home"
    dimensions: Dict[str, List[str]] = field(default_factory=lambda: {"language": ["en_US"]})
    is_removed: bool = False
    node_data: Any = None

    def __post_init__(self) -> None:
        """Give every node persisted data unless told otherwise."""
        if self.node_data is None:
            self.node_data = FakeNodeData(f"poid-{self.identifier}")


def make_node(identifier: str, **kwargs: Any) -> FakeNode:
    """Build a FakeNode with a path derived from its identifier."""
    kwargs.setdefault("path", f"/sites/acme/{identifier}")
    return FakeNode(identifier=identifier, **kwargs)


@pytest.fixture
def bulk_indexer():
    """Mock synchronous bulk indexer with generous limits."""
    indexer = MagicMock()
    indexer.max_bulk_elements = 1000
    indexer.max_bulk_bytes = 10_000_000
    indexer.index_node = AsyncMock()
    indexer.remove_node = AsyncMock()
    indexer.flush = AsyncMock()
    indexer.reset = AsyncMock()
    return indexer


@pytest.fixture
def job_queue():
    """In-memory job queue."""
    return InMemoryJobQueue()


@pytest.fixture
def resolver():
    """Resolver reading FakeNodeData.persistence_object_identifier."""
    return AttributeIdentifierResolver()


@pytest.fixture
def mock_logger():
    """Mock contextual logger."""
    logger = MagicMock()
    logger.with_context.return_value = logger
    return logger


@pytest.fixture
def make_coordinator(bulk_indexer, job_queue, resolver, mock_logger):
    """Factory building a coordinator with the shared fakes and given config values."""

    def _make(**config_values: Any) -> DispatchCoordinator:
        config_values.setdefault("bulk", BulkLimits(elements=1000, octets=10_000_000))
        config = IndexerConfig(**config_values)
        return DispatchCoordinator(
            bulk_indexer=bulk_indexer,
            job_queue=job_queue,
            resolver=resolver,
            config=config,
            logger=mock_logger,
        )

    return _make


@pytest.fixture
def new_node():
    """Factory for FakeNode instances: ``new_node("id", workspace_name="user-demo")``."""
    return make_node
