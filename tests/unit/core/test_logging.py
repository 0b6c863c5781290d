"""Tests for contextual logging."""

import json
import logging

from queue_indexer.core.logging import ContextualLogger, JSONFormatter, LoggerConfigurator


def test_with_context_merges_dimensions():
    """New dimensions are added without touching the parent logger."""
    parent = ContextualLogger(logging.getLogger("queue_indexer.test"), {"component": "a"})

    child = parent.with_context(workspace="live")

    assert child.dimensions == {"component": "a", "workspace": "live"}
    assert parent.dimensions == {"component": "a"}


def test_dimensions_reach_the_record(caplog):
    """Dimensions are attached to each record as extra attributes."""
    log = LoggerConfigurator.configure_logger(
        "queue_indexer.test.records", dimensions={"queue_name": "live"}
    )

    # The package logger does not propagate, so capture on the logger itself
    log.logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="queue_indexer.test.records"):
            log.with_context(workspace="user-demo").info("flushed")
    finally:
        log.logger.removeHandler(caplog.handler)

    [record] = caplog.records
    assert record.queue_name == "live"
    assert record.workspace == "user-demo"


def test_package_logger_does_not_propagate_to_root():
    """Records stop at the package handler so host root handlers do not repeat them."""
    LoggerConfigurator.configure_root()
    LoggerConfigurator.configure_root()

    package_logger = logging.getLogger("queue_indexer")

    assert package_logger.propagate is False
    assert len(package_logger.handlers) == 1


def test_json_formatter_includes_dimensions():
    """JSON lines carry the message and every dimension."""
    record = logging.makeLogRecord(
        {"name": "queue_indexer", "levelname": "INFO", "msg": "queued %s jobs", "args": (2,)}
    )
    record.workspace = "live"

    line = json.loads(JSONFormatter().format(record))

    assert line["message"] == "queued 2 jobs"
    assert line["level"] == "INFO"
    assert line["workspace"] == "live"
    assert "timestamp" in line
