"""Collaborator protocols consumed by the dispatch engine.

The engine never implements these itself; it is handed concrete instances at
construction. Nodes, the bulk indexer and the job queue all live outside this
package.
"""

from typing import Any, Mapping, Optional, Protocol, Sequence, Union, runtime_checkable

from queue_indexer.schemas.jobs import IndexingJob, RemovalJob


@runtime_checkable
class NodeReference(Protocol):
    """A content repository node as seen by the indexer."""

    @property
    def identifier(self) -> str:
        """Node identity, stable across workspaces."""
        ...

    @property
    def node_type(self) -> str:
        """Name of the node's type."""
        ...

    @property
    def path(self) -> str:
        """Hierarchical node path."""
        ...

    @property
    def dimensions(self) -> Mapping[str, Sequence[str]]:
        """Dimension name to ordered dimension values."""
        ...

    @property
    def workspace_name(self) -> str:
        """Name of the workspace the node currently belongs to."""
        ...

    @property
    def is_removed(self) -> bool:
        """Whether the node is a removal tombstone."""
        ...

    @property
    def node_data(self) -> Any:
        """The underlying persisted entity."""
        ...


@runtime_checkable
class IdentifierResolver(Protocol):
    """Resolves the persistence identifier of a persisted entity."""

    def resolve(self, entity: Any) -> Optional[str]:
        """Return the identifier, or None/raise if the entity is not persisted."""
        ...


@runtime_checkable
class BulkIndexer(Protocol):
    """Synchronous bulk indexer writing directly to the search store."""

    @property
    def max_bulk_elements(self) -> int:
        """Maximum number of elements per bulk request."""
        ...

    @property
    def max_bulk_bytes(self) -> int:
        """Maximum total byte size per bulk request."""
        ...

    async def index_node(self, node: NodeReference, target_workspace: Optional[str] = None) -> None:
        """Index a node directly."""
        ...

    async def remove_node(
        self, node: NodeReference, target_workspace: Optional[str] = None
    ) -> None:
        """Remove a node directly."""
        ...

    async def flush(self) -> None:
        """Send whatever the bulk indexer has buffered."""
        ...

    async def reset(self) -> None:
        """Discard whatever the bulk indexer has buffered."""
        ...


@runtime_checkable
class JobQueue(Protocol):
    """Asynchronous job queue."""

    async def submit(self, queue_name: str, job: Union[IndexingJob, RemovalJob]) -> None:
        """Submit a job to the named queue."""
        ...
