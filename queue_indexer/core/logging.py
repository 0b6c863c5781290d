"""Logging with contextual dimensions.

Every logger handed out here is a ``ContextualLogger``: a ``LoggerAdapter`` that
attaches a dict of dimensions (workspace, queue name, component, ...) to each
record. Outside local development records are rendered as one JSON object per
line so the dimensions stay machine-readable.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Optional, Tuple

from queue_indexer.core.config import settings

_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render a log record and its dimensions as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record as JSON."""
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a set of dimensions on every record."""

    def __init__(self, logger: logging.Logger, dimensions: Optional[Dict[str, Any]] = None):
        """Initialize the adapter.

        Args:
            logger: Underlying stdlib logger
            dimensions: Key/value pairs attached to every record
        """
        super().__init__(logger, {})
        self.dimensions: Dict[str, Any] = dict(dimensions or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Merge dimensions into the record's ``extra``."""
        extra = dict(self.dimensions)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with additional dimensions."""
        merged = {**self.dimensions, **dimensions}
        return ContextualLogger(self.logger, merged)


class LoggerConfigurator:
    """Configures handlers once and hands out contextual loggers."""

    _configured = False

    @classmethod
    def configure_root(cls) -> None:
        """Install the stream handler on the package root logger (idempotent)."""
        if cls._configured:
            return

        root = logging.getLogger("queue_indexer")
        root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

        handler = logging.StreamHandler(sys.stdout)
        if settings.LOCAL_DEVELOPMENT:
            handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
        else:
            handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
        # Records stop here; host root handlers never see them
        root.propagate = False
        cls._configured = True

    @classmethod
    def configure_logger(
        cls, name: str, dimensions: Optional[Dict[str, Any]] = None
    ) -> ContextualLogger:
        """Get a contextual logger for ``name``.

        Args:
            name: Logger name (dotted, under ``queue_indexer``)
            dimensions: Initial dimensions for every record

        Returns:
            ContextualLogger bound to the named logger
        """
        cls.configure_root()
        return ContextualLogger(logging.getLogger(name), dimensions)


def get_logger(name: str = "queue_indexer") -> ContextualLogger:
    """Get a contextual logger without dimensions."""
    return LoggerConfigurator.configure_logger(name)


logger = get_logger()
