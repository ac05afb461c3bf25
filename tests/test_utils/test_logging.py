"""Tests for logging setup."""

import json

import structlog

from transtudio.utils.logging import configure_logging, get_logger


def test_json_logs_written_to_file(tmp_path):
    log_file = tmp_path / "logs" / "transtudio.log"
    configure_logging(level="DEBUG", json=True, log_file=log_file)
    try:
        get_logger("test", document_id="doc-1").info("document uploaded", size=3)
        get_logger("test").debug("debug record")
    finally:
        structlog.reset_defaults()

    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert records[0]["event"] == "document uploaded"
    assert records[0]["document_id"] == "doc-1"
    assert records[0]["size"] == 3
    assert records[0]["level"] == "info"
    assert records[1]["event"] == "debug record"


def test_level_filters_records(tmp_path):
    log_file = tmp_path / "transtudio.log"
    configure_logging(level="WARNING", json=True, log_file=log_file)
    try:
        logger = get_logger("test")
        logger.info("hidden")
        logger.warning("shown")
    finally:
        structlog.reset_defaults()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["shown"]
