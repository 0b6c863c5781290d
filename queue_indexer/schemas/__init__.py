"""Serializable records exchanged with the job queue."""

from queue_indexer.schemas.jobs import IndexingJob, Job, RemovalJob, parse_job
from queue_indexer.schemas.node_payload import NodePayload

__all__ = [
    "NodePayload",
    "IndexingJob",
    "RemovalJob",
    "Job",
    "parse_job",
]
