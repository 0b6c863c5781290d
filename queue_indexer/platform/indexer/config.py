"""Indexer configuration.

Values come from field defaults, then ``QUEUE_INDEXER__*`` environment variables,
then constructor arguments. Nested fields use a double underscore delimiter:

    QUEUE_INDEXER__ENABLE_ASYNC_INDEXING=false
    QUEUE_INDEXER__QUEUE_BATCH_SIZE=250
    QUEUE_INDEXER__BULK__ELEMENTS=1000
    QUEUE_INDEXER__BULK__OCTETS=20000000
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LIVE_WORKSPACE_NAME = "live"
LIVE_QUEUE_NAME = "queue_indexer.live"


class BulkLimits(BaseModel):
    """Size limits of one bulk request to the search store."""

    model_config = ConfigDict(frozen=True)

    elements: int = Field(500, gt=0, description="Max elements per bulk request")
    octets: int = Field(40_000_000, gt=0, description="Max total bytes per bulk request")


class IndexerConfig(BaseSettings):
    """Declarative configuration of a dispatch coordinator.

    Immutable once built; a coordinator reads it only at construction.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUEUE_INDEXER__",
        env_nested_delimiter="__",
        frozen=True,
        extra="ignore",
    )

    enable_async_indexing: bool = Field(
        True, description="Batch events into queue jobs instead of indexing directly"
    )
    index_all_workspaces: bool = Field(
        True, description="If false, only events for the live workspace are accumulated"
    )
    queue_batch_size: int = Field(
        500, gt=0, description="Pending payload count that triggers a queue flush"
    )
    bulk: Optional[BulkLimits] = Field(
        None, description="Bulk request limits; None means ask the bulk indexer"
    )
    live_workspace: str = Field(LIVE_WORKSPACE_NAME, min_length=1)
    queue_name: str = Field(LIVE_QUEUE_NAME, min_length=1)
    index_name_postfix: str = Field("", description="Postfix of the target index name")

    @classmethod
    def default(cls) -> "IndexerConfig":
        """Queue all workspaces with default thresholds."""
        return cls()

    @classmethod
    def synchronous(cls) -> "IndexerConfig":
        """Bypass batching; every event goes straight to the bulk indexer."""
        return cls(enable_async_indexing=False)

    @classmethod
    def live_only(cls) -> "IndexerConfig":
        """Queue only events targeting the live workspace."""
        return cls(index_all_workspaces=False)
