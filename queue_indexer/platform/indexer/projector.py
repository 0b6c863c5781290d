"""Projection of nodes into queue payloads."""

from typing import Any, Optional

from queue_indexer.platform.indexer.exceptions import ProjectionError
from queue_indexer.platform.indexer.protocol import IdentifierResolver, NodeReference
from queue_indexer.schemas.node_payload import NodePayload


class AttributeIdentifierResolver:
    """Reads the persistence identifier from an attribute of the node data.

    Entities without the attribute, or with an empty value, count as not yet
    persisted.
    """

    def __init__(self, attribute: str = "persistence_object_identifier"):
        """Initialize resolver.

        Args:
            attribute: Attribute holding the identifier on the persisted entity
        """
        self.attribute = attribute

    def resolve(self, entity: Any) -> Optional[str]:
        """Return the identifier as a string, or None if the entity has none."""
        value = getattr(entity, self.attribute, None)
        if value is None or value == "":
            return None
        return str(value)


class PayloadProjector:
    """Builds the minimal, serializable payload queued for a node."""

    def __init__(self, resolver: IdentifierResolver):
        """Initialize projector.

        Args:
            resolver: Resolves the persistence identifier of a node's data
        """
        self._resolver = resolver

    def project(self, node: NodeReference, workspace_override: Optional[str] = None) -> NodePayload:
        """Project a node into a payload.

        Args:
            node: Node reference
            workspace_override: Target workspace, e.g. during publishing

        Returns:
            NodePayload scoped to the override if given, else the node's workspace

        Raises:
            ProjectionError: If the node data has no persistence identifier
        """
        try:
            persistence_id = self._resolver.resolve(node.node_data)
        except ProjectionError:
            raise
        except Exception as e:
            raise ProjectionError(
                f"Cannot resolve persistence identifier of node {node.identifier}: {e}"
            ) from e

        if not persistence_id:
            raise ProjectionError(
                f"Node {node.identifier} at {node.path} has no persistence identifier "
                f"(node data not persisted?)"
            )

        return NodePayload(
            persistence_object_identifier=persistence_id,
            identifier=node.identifier,
            dimensions={name: list(values) for name, values in node.dimensions.items()},
            workspace=workspace_override if workspace_override is not None else node.workspace_name,
            node_type=node.node_type,
            path=node.path,
        )
