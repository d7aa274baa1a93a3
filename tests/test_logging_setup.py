"""Tests for the JSONL logging bootstrap."""

import json
import logging

import pytest

from resource_discovery.logging_setup import JsonlHandler
from resource_discovery.logging_setup import init_json_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def test_writes_one_json_object_per_record(tmp_path, restore_root_logger):
    log_path = tmp_path / "logs" / "discovery.jsonl"
    init_json_logging(log_path, "debug")

    logger = logging.getLogger("resource_discovery.test")
    logger.debug("first %s", "message")
    logger.info("second", extra={"component": "/opt/lib"})

    lines = log_path.read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert [r["message"] for r in records] == ["first message", "second"]
    assert records[0]["lvl"] == "DEBUG"
    assert records[1]["logger"] == "resource_discovery.test"
    assert records[1]["component"] == "/opt/lib"
    assert "lineno" not in records[1]


def test_reinitializing_replaces_handler(tmp_path, restore_root_logger):
    init_json_logging(tmp_path / "a.jsonl", "INFO")
    init_json_logging(tmp_path / "b.jsonl", "INFO")

    handlers = [h for h in restore_root_logger.handlers if isinstance(h, JsonlHandler)]
    assert len(handlers) == 1
    assert handlers[0].path == tmp_path / "b.jsonl"
