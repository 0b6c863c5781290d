"""Indexer-specific exceptions for error handling."""


class IndexerError(Exception):
    """Base exception for the queue indexer."""

    pass


class ProjectionError(IndexerError):
    """Raised when a node cannot be turned into a queue payload.

    This is a local, non-retryable error - the current event is aborted and
    nothing is accumulated for it.

    Examples:
    - Node data not yet persisted (no persistence identifier)
    - Identifier resolver failed for the node data
    """

    pass


class QueueSubmissionError(IndexerError):
    """Raised when a job could not be handed to the job queue.

    Aborts the remaining submissions of the current flush. Work drained for
    jobs that were already submitted, and for the failing job, is not restored.
    """

    def __init__(self, message: str, queue_name: str = "", workspace: str = ""):
        """Initialize queue submission error.

        Args:
            message: Human-readable description
            queue_name: Queue the job was submitted to
            workspace: Workspace of the failing job
        """
        self.queue_name = queue_name
        self.workspace = workspace
        super().__init__(message)


class BulkFlushError(IndexerError):
    """Raised when the synchronous bulk indexer fails to flush or reset."""

    pass
