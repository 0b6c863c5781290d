"""Job records submitted to the asynchronous queue.

One job covers one workspace and one operation kind. Payloads keep the order in
which their events were accumulated.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from queue_indexer.schemas.node_payload import NodePayload


class _WorkspaceJob(BaseModel):
    """Fields shared by indexing and removal jobs."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    index_name_postfix: str = Field("", alias="indexNamePostfix")
    workspace: str
    payloads: List[NodePayload] = Field(default_factory=list)

    def to_message(self) -> str:
        """Serialize to the JSON wire form."""
        return self.model_dump_json(by_alias=True)


class IndexingJob(_WorkspaceJob):
    """Index these payloads for this workspace."""

    kind: Literal["index"] = "index"


class RemovalJob(_WorkspaceJob):
    """Remove these payloads from this workspace's index."""

    kind: Literal["remove"] = "remove"


Job = Annotated[Union[IndexingJob, RemovalJob], Field(discriminator="kind")]

_job_adapter: TypeAdapter = TypeAdapter(Job)


def parse_job(raw: Union[str, bytes]) -> Union[IndexingJob, RemovalJob]:
    """Rebuild a job from its JSON message.

    Args:
        raw: JSON produced by ``to_message``

    Returns:
        IndexingJob or RemovalJob, selected by the ``kind`` field

    Raises:
        pydantic.ValidationError: If the message is not a valid job
    """
    return _job_adapter.validate_json(raw)
