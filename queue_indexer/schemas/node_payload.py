"""Minimal node record carried by queued indexing jobs."""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class NodePayload(BaseModel):
    """Serializable snapshot of a node, produced once per index/remove event.

    Field names are snake_case in Python and camelCase on the wire, matching
    the payload shape queue consumers expect.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    persistence_object_identifier: str = Field(
        ..., alias="persistenceObjectIdentifier", description="Id of the persisted node data"
    )
    identifier: str = Field(..., description="Node identity, stable across workspaces")
    dimensions: Dict[str, List[str]] = Field(
        default_factory=dict, description="Dimension name to ordered dimension values"
    )
    workspace: str = Field(..., description="Workspace the payload is scoped to")
    node_type: str = Field(..., alias="nodeType", description="Name of the node type")
    path: str = Field(..., description="Hierarchical node path")

    def to_message(self) -> str:
        """Serialize to the JSON wire form."""
        return self.model_dump_json(by_alias=True)

    def byte_size(self) -> int:
        """Size in bytes of the UTF-8 encoded wire form."""
        return len(self.to_message().encode("utf-8"))
