"""Threshold-based flush decisions."""

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from queue_indexer.platform.indexer.config import BulkLimits, IndexerConfig

if TYPE_CHECKING:
    from queue_indexer.platform.indexer.protocol import BulkIndexer


class FlushDecision(enum.Flag):
    """Which flushes are due. QUEUE and BULK are independent and may combine."""

    NONE = 0
    QUEUE = enum.auto()
    BULK = enum.auto()


@dataclass(frozen=True)
class FlushPolicy:
    """Stateless evaluation of pending volume against two thresholds.

    Attributes:
        queue_batch_size: Pending count at which work is handed to the job queue
        max_bulk_elements: Pending count at which the bulk indexer must flush
        max_bulk_bytes: Pending byte size at which the bulk indexer must flush
    """

    queue_batch_size: int
    max_bulk_elements: int
    max_bulk_bytes: int

    def __post_init__(self) -> None:
        """Reject non-positive thresholds."""
        for name in ("queue_batch_size", "max_bulk_elements", "max_bulk_bytes"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    def evaluate(self, total_count: int, total_bytes: int) -> FlushDecision:
        """Decide which flushes the given volume calls for.

        Args:
            total_count: Pending index + removal payloads
            total_bytes: Serialized size of all pending payloads

        Returns:
            FlushDecision, possibly QUEUE | BULK
        """
        decision = FlushDecision.NONE
        if total_count >= self.queue_batch_size:
            decision |= FlushDecision.QUEUE
        if total_count >= self.max_bulk_elements or total_bytes >= self.max_bulk_bytes:
            decision |= FlushDecision.BULK
        return decision

    @classmethod
    def from_config(
        cls, config: IndexerConfig, bulk_indexer: Optional["BulkIndexer"] = None
    ) -> "FlushPolicy":
        """Build a policy from configuration.

        Bulk limits set in ``config`` win; otherwise they are read from the bulk
        indexer, falling back to ``BulkLimits`` defaults.
        """
        limits = config.bulk
        if limits is None and bulk_indexer is not None:
            limits = BulkLimits(
                elements=bulk_indexer.max_bulk_elements,
                octets=bulk_indexer.max_bulk_bytes,
            )
        if limits is None:
            limits = BulkLimits()
        return cls(
            queue_batch_size=config.queue_batch_size,
            max_bulk_elements=limits.elements,
            max_bulk_bytes=limits.octets,
        )
