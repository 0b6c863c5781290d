"""Batching and dispatch engine for node index/remove events.

Components (leaf to root):
    PayloadProjector: node -> NodePayload
    WorkspaceAccumulator: pending payloads per workspace and kind
    FlushPolicy: queue and bulk threshold checks
    DispatchCoordinator: event entry point, flush and reset

Wiring:
    CoordinatorBuilder, IndexerConfig
"""

from queue_indexer.platform.indexer.accumulator import DrainedWork, WorkspaceAccumulator
from queue_indexer.platform.indexer.builder import CoordinatorBuilder
from queue_indexer.platform.indexer.config import (
    LIVE_QUEUE_NAME,
    LIVE_WORKSPACE_NAME,
    BulkLimits,
    IndexerConfig,
)
from queue_indexer.platform.indexer.coordinator import DispatchCoordinator
from queue_indexer.platform.indexer.exceptions import (
    BulkFlushError,
    IndexerError,
    ProjectionError,
    QueueSubmissionError,
)
from queue_indexer.platform.indexer.flush_policy import FlushDecision, FlushPolicy
from queue_indexer.platform.indexer.projector import AttributeIdentifierResolver, PayloadProjector
from queue_indexer.platform.indexer.protocol import (
    BulkIndexer,
    IdentifierResolver,
    JobQueue,
    NodeReference,
)

__all__ = [
    # Components
    "PayloadProjector",
    "AttributeIdentifierResolver",
    "WorkspaceAccumulator",
    "DrainedWork",
    "FlushPolicy",
    "FlushDecision",
    "DispatchCoordinator",
    # Wiring
    "CoordinatorBuilder",
    "IndexerConfig",
    "BulkLimits",
    "LIVE_QUEUE_NAME",
    "LIVE_WORKSPACE_NAME",
    # Protocols
    "NodeReference",
    "IdentifierResolver",
    "BulkIndexer",
    "JobQueue",
    # Exceptions
    "IndexerError",
    "ProjectionError",
    "QueueSubmissionError",
    "BulkFlushError",
]
