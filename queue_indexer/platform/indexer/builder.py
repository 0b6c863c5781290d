"""Builder for a dispatch coordinator with its collaborators."""

from typing import Optional

from queue_indexer.core.logging import ContextualLogger, LoggerConfigurator
from queue_indexer.platform.indexer.config import IndexerConfig
from queue_indexer.platform.indexer.coordinator import DispatchCoordinator
from queue_indexer.platform.indexer.flush_policy import FlushPolicy
from queue_indexer.platform.indexer.projector import AttributeIdentifierResolver
from queue_indexer.platform.indexer.protocol import BulkIndexer, IdentifierResolver, JobQueue


class CoordinatorBuilder:
    """Builds a DispatchCoordinator from configuration and collaborators."""

    @classmethod
    def build(
        cls,
        bulk_indexer: BulkIndexer,
        job_queue: JobQueue,
        resolver: Optional[IdentifierResolver] = None,
        config: Optional[IndexerConfig] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> DispatchCoordinator:
        """Build a coordinator.

        Args:
            bulk_indexer: Synchronous bulk indexer
            job_queue: Job queue adapter
            resolver: Identifier resolver (defaults to AttributeIdentifierResolver)
            config: Indexer config (defaults to env-derived IndexerConfig)
            logger: Optional logger; one with coordinator dimensions is created otherwise

        Returns:
            DispatchCoordinator ready to receive events.
        """
        config = config or IndexerConfig()
        resolver = resolver or AttributeIdentifierResolver()
        policy = FlushPolicy.from_config(config, bulk_indexer)
        logger = logger or LoggerConfigurator.configure_logger(
            "queue_indexer.platform.indexer",
            dimensions={
                "component": "dispatch_coordinator",
                "queue_name": config.queue_name,
                "index_name_postfix": config.index_name_postfix,
            },
        )

        if config.enable_async_indexing:
            scope = "all workspaces" if config.index_all_workspaces else config.live_workspace
            logger.info(
                f"Created queue coordinator for {scope}: queue batch size "
                f"{policy.queue_batch_size}, bulk limits {policy.max_bulk_elements} elements / "
                f"{policy.max_bulk_bytes} bytes"
            )
        else:
            logger.info("Created coordinator with async indexing disabled (direct bulk indexing)")

        return DispatchCoordinator(
            bulk_indexer=bulk_indexer,
            job_queue=job_queue,
            resolver=resolver,
            config=config,
            policy=policy,
            logger=logger,
        )
