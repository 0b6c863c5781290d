"""Dispatch coordinator: batches node index/remove events into queue jobs.

Events are accumulated per workspace and operation kind. Two independent limits
decide when accumulated work leaves the coordinator:

- the queue batch size: pending work is drained into one job per workspace and
  kind and submitted to the job queue, then the bulk indexer is flushed
- the bulk request limits: whatever is still pending is drained the same way,
  so no job outgrows one bulk request and the pending volume stays below the
  limits

Queue jobs can be retried by the queue infrastructure; a direct bulk flush cannot.
Neither path is retried here. A failed submission aborts the rest of the flush
and the drained work is not restored (at-most-once delivery).
"""

import asyncio
from typing import List, Optional, Union

from queue_indexer.core.logging import ContextualLogger
from queue_indexer.core.logging import logger as default_logger
from queue_indexer.platform.indexer.accumulator import DrainedWork, WorkspaceAccumulator
from queue_indexer.platform.indexer.config import IndexerConfig
from queue_indexer.platform.indexer.exceptions import BulkFlushError, QueueSubmissionError
from queue_indexer.platform.indexer.flush_policy import FlushDecision, FlushPolicy
from queue_indexer.platform.indexer.projector import PayloadProjector
from queue_indexer.platform.indexer.protocol import (
    BulkIndexer,
    IdentifierResolver,
    JobQueue,
    NodeReference,
)
from queue_indexer.schemas.jobs import IndexingJob, RemovalJob


class DispatchCoordinator:
    """Entry point for index/remove events of one unit of work.

    Meant to be used by one publish or batch run at a time and reset between
    runs. All mutations run under a single ``asyncio.Lock`` so add, threshold
    check and flush form one critical section when tasks share an instance.
    """

    def __init__(
        self,
        bulk_indexer: BulkIndexer,
        job_queue: JobQueue,
        resolver: IdentifierResolver,
        config: Optional[IndexerConfig] = None,
        policy: Optional[FlushPolicy] = None,
        logger: Optional[ContextualLogger] = None,
    ):
        """Initialize the coordinator.

        Args:
            bulk_indexer: Synchronous bulk indexer to delegate to
            job_queue: Queue receiving indexing and removal jobs
            resolver: Resolves persistence identifiers of node data
            config: Indexer configuration (defaults to env-derived IndexerConfig)
            policy: Flush policy (defaults to one built from config and bulk indexer)
            logger: Optional contextual logger
        """
        self.config = config or IndexerConfig()
        self._bulk_indexer = bulk_indexer
        self._job_queue = job_queue
        self._projector = PayloadProjector(resolver)
        self._accumulator = WorkspaceAccumulator()
        self._policy = policy or FlushPolicy.from_config(self.config, bulk_indexer)
        self._lock = asyncio.Lock()
        self.logger = logger or default_logger.with_context(
            component="dispatch_coordinator", queue_name=self.config.queue_name
        )

    @property
    def policy(self) -> FlushPolicy:
        """The flush policy in effect."""
        return self._policy

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def index_node(self, node: NodeReference, target_workspace: Optional[str] = None) -> None:
        """Handle an "index this node" event.

        Removed nodes are routed to ``remove_node``.

        Args:
            node: Node to index
            target_workspace: Target workspace name, passed in during publishing

        Raises:
            ProjectionError: If the node cannot be projected into a payload
            QueueSubmissionError: If a triggered flush fails to submit a job
            BulkFlushError: If a triggered bulk flush fails
        """
        async with self._lock:
            if node.is_removed:
                await self._remove_node(node, target_workspace)
            else:
                await self._index_node(node, target_workspace)

    async def remove_node(
        self, node: NodeReference, target_workspace: Optional[str] = None
    ) -> None:
        """Handle a "remove this node" event.

        Args:
            node: Node to remove
            target_workspace: Target workspace name, passed in during publishing

        Raises:
            ProjectionError: If the node cannot be projected into a payload
            QueueSubmissionError: If a triggered flush fails to submit a job
            BulkFlushError: If a triggered bulk flush fails
        """
        async with self._lock:
            await self._remove_node(node, target_workspace)

    async def flush(self) -> None:
        """Submit all pending work as queue jobs, then flush the bulk indexer.

        Raises:
            QueueSubmissionError: If a job cannot be submitted
            BulkFlushError: If the bulk indexer flush fails
        """
        async with self._lock:
            await self._flush()

    async def reset(self) -> None:
        """Discard all pending work and reset the bulk indexer.

        Raises:
            BulkFlushError: If the bulk indexer reset fails
        """
        async with self._lock:
            self._accumulator.clear()
            try:
                await self._bulk_indexer.reset()
            except BulkFlushError:
                raise
            except Exception as e:
                self.logger.error(f"[Coordinator] Bulk indexer reset failed: {e}", exc_info=True)
                raise BulkFlushError(f"Bulk indexer reset failed: {e}") from e

    def total_index_count(self) -> int:
        """Count pending index payloads."""
        return self._accumulator.total_index_count()

    def total_removal_count(self) -> int:
        """Count pending removal payloads."""
        return self._accumulator.total_removal_count()

    def total_count(self) -> int:
        """Count all pending payloads."""
        return self._accumulator.total_count()

    # -------------------------------------------------------------------------
    # Event handling
    # -------------------------------------------------------------------------

    async def _index_node(self, node: NodeReference, target_workspace: Optional[str]) -> None:
        if not self.config.enable_async_indexing:
            await self._bulk_indexer.index_node(node, target_workspace)
            return

        workspace = self._effective_workspace(node, target_workspace)
        if not self._accepts_workspace(workspace):
            return

        payload = self._projector.project(node, workspace)
        self._accumulator.add_to_index(workspace, payload)
        await self._flush_if_needed()

    async def _remove_node(self, node: NodeReference, target_workspace: Optional[str]) -> None:
        if not self.config.enable_async_indexing:
            await self._bulk_indexer.remove_node(node, target_workspace)
            return

        workspace = self._effective_workspace(node, target_workspace)
        if not self._accepts_workspace(workspace):
            return

        payload = self._projector.project(node, workspace)
        self._accumulator.add_to_removal(workspace, payload)
        await self._flush_if_needed()

    @staticmethod
    def _effective_workspace(node: NodeReference, target_workspace: Optional[str]) -> str:
        return target_workspace if target_workspace is not None else node.workspace_name

    def _accepts_workspace(self, workspace: str) -> bool:
        """Apply the live-only filter; dropped events are not an error."""
        if self.config.index_all_workspaces:
            return True
        return workspace == self.config.live_workspace

    # -------------------------------------------------------------------------
    # Flushing
    # -------------------------------------------------------------------------

    async def _flush_if_needed(self) -> None:
        """Run the queue check, then the bulk check on what remains.

        Either check drains the accumulator, so a threshold fires once on the
        event that crosses it and not again on later events.
        """
        decision = self._evaluate()
        if FlushDecision.QUEUE in decision:
            self.logger.debug(
                f"[Coordinator] Queue batch size {self._policy.queue_batch_size} reached "
                f"with {self._accumulator.total_count()} pending payloads"
            )
            await self._flush()
            decision = self._evaluate()

        if FlushDecision.BULK in decision:
            self.logger.debug(
                f"[Coordinator] Bulk limits reached "
                f"({self._policy.max_bulk_elements} elements / "
                f"{self._policy.max_bulk_bytes} bytes) with "
                f"{self._accumulator.total_count()} pending payloads, draining"
            )
            await self._flush()

    def _evaluate(self) -> FlushDecision:
        return self._policy.evaluate(
            self._accumulator.total_count(), self._accumulator.total_byte_size()
        )

    async def _flush(self) -> None:
        drained = self._accumulator.drain_all()
        if not drained.is_empty:
            self.logger.debug(f"[Coordinator] Flushing {drained.summary()}")
            for job in self._build_jobs(drained):
                await self._submit(job)

        await self._flush_bulk_indexer()

    def _build_jobs(self, drained: DrainedWork) -> List[Union[IndexingJob, RemovalJob]]:
        """One job per workspace and kind, index jobs first."""
        postfix = self.config.index_name_postfix
        jobs: List[Union[IndexingJob, RemovalJob]] = [
            IndexingJob(index_name_postfix=postfix, workspace=workspace, payloads=payloads)
            for workspace, payloads in drained.to_index.items()
        ]
        jobs.extend(
            RemovalJob(index_name_postfix=postfix, workspace=workspace, payloads=payloads)
            for workspace, payloads in drained.to_remove.items()
        )
        return jobs

    async def _submit(self, job: Union[IndexingJob, RemovalJob]) -> None:
        queue_name = self.config.queue_name
        try:
            await self._job_queue.submit(queue_name, job)
        except QueueSubmissionError:
            raise
        except Exception as e:
            self.logger.error(
                f"[Coordinator] Submitting {job.kind} job for workspace {job.workspace} "
                f"to {queue_name} failed: {e}",
                exc_info=True,
            )
            raise QueueSubmissionError(
                f"Submitting {job.kind} job for workspace {job.workspace} failed: {e}",
                queue_name=queue_name,
                workspace=job.workspace,
            ) from e

        self.logger.debug(
            f"[Coordinator] Queued {job.kind} job with {len(job.payloads)} payloads "
            f"for workspace {job.workspace}"
        )

    async def _flush_bulk_indexer(self) -> None:
        try:
            await self._bulk_indexer.flush()
        except BulkFlushError:
            raise
        except Exception as e:
            self.logger.error(f"[Coordinator] Bulk indexer flush failed: {e}", exc_info=True)
            raise BulkFlushError(f"Bulk indexer flush failed: {e}") from e
