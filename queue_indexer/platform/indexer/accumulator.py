"""Per-workspace accumulation of pending index and removal payloads."""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from queue_indexer.schemas.node_payload import NodePayload

# workspace -> node identifier -> payload, both levels in insertion order
PendingSets = Dict[str, Dict[str, NodePayload]]


@dataclass
class DrainedWork:
    """Everything that was pending at drain time, grouped per workspace.

    Attributes:
        to_index: Workspace to payloads awaiting indexing, in insertion order
        to_remove: Workspace to payloads awaiting removal, in insertion order
    """

    to_index: Dict[str, List[NodePayload]] = field(default_factory=dict)
    to_remove: Dict[str, List[NodePayload]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """Check if nothing was drained."""
        return not (self.to_index or self.to_remove)

    def summary(self) -> str:
        """Get a summary string of the drained work."""
        index_count = sum(len(p) for p in self.to_index.values())
        remove_count = sum(len(p) for p in self.to_remove.values())
        return (
            f"{index_count} to index in {len(self.to_index)} workspace(s), "
            f"{remove_count} to remove in {len(self.to_remove)} workspace(s)"
        )


class WorkspaceAccumulator:
    """Holds at most one pending payload per node, kind and workspace.

    A later event for the same node identifier overwrites the earlier payload in
    place. Entries are never removed one by one; ``drain_all`` empties
    everything at once.
    """

    def __init__(self) -> None:
        """Initialize an empty accumulator."""
        self._to_index: PendingSets = {}
        self._to_remove: PendingSets = {}
        # (kind, workspace, identifier) -> serialized payload size
        self._byte_sizes: Dict[Tuple[str, str, str], int] = {}

    def add_to_index(self, workspace: str, payload: NodePayload) -> None:
        """Insert or overwrite a payload in the index set of ``workspace``."""
        self._to_index.setdefault(workspace, {})[payload.identifier] = payload
        self._byte_sizes[("index", workspace, payload.identifier)] = payload.byte_size()

    def add_to_removal(self, workspace: str, payload: NodePayload) -> None:
        """Insert or overwrite a payload in the removal set of ``workspace``."""
        self._to_remove.setdefault(workspace, {})[payload.identifier] = payload
        self._byte_sizes[("remove", workspace, payload.identifier)] = payload.byte_size()

    def total_index_count(self) -> int:
        """Count pending index payloads across all workspaces."""
        return sum(len(pending) for pending in self._to_index.values())

    def total_removal_count(self) -> int:
        """Count pending removal payloads across all workspaces."""
        return sum(len(pending) for pending in self._to_remove.values())

    def total_count(self) -> int:
        """Count all pending payloads."""
        return self.total_index_count() + self.total_removal_count()

    def total_byte_size(self) -> int:
        """Sum of the serialized sizes of all pending payloads."""
        return sum(self._byte_sizes.values())

    @property
    def is_empty(self) -> bool:
        """Check if nothing is pending."""
        return not (self._to_index or self._to_remove)

    def workspaces(self) -> List[str]:
        """Workspaces with pending work, index sets first, without duplicates."""
        return list(dict.fromkeys([*self._to_index, *self._to_remove]))

    def drain_all(self) -> DrainedWork:
        """Return all pending payloads and clear the accumulator.

        Returns:
            DrainedWork with per-workspace payload lists in insertion order
        """
        drained = DrainedWork(
            to_index={ws: list(pending.values()) for ws, pending in self._to_index.items()},
            to_remove={ws: list(pending.values()) for ws, pending in self._to_remove.items()},
        )
        self.clear()
        return drained

    def clear(self) -> None:
        """Discard all pending payloads."""
        self._to_index = {}
        self._to_remove = {}
        self._byte_sizes = {}
