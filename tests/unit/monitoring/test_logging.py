"""
Unit tests for build logging.

Tests for the formatters, context injection and logger setup.
"""

import json
import logging

from wcag_graph.monitoring.logging import (
    ROOT_LOGGER_NAME,
    ContextAdapter,
    JsonFormatter,
    LoggingOptions,
    TextFormatter,
    setup_build_logger,
    with_context,
)


def _record(msg="Catalogued 7 techniques", **extra):
    record = logging.LogRecord(
        name="wcag_graph.ingestion.techniques",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Tests for TextFormatter and JsonFormatter."""

    def test_text_without_context(self):
        line = TextFormatter().format(_record())
        assert line == "WARNING wcag_graph.ingestion.techniques Catalogued 7 techniques"

    def test_text_with_context(self):
        line = TextFormatter().format(_record(stage="techniques", document="css/C9.html"))
        assert "[stage=techniques document=css/C9.html]" in line

    def test_json_fields(self):
        entry = json.loads(
            JsonFormatter().format(_record(build_id="abc123", document="css/C9.html"))
        )
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "wcag_graph.ingestion.techniques"
        assert entry["msg"] == "Catalogued 7 techniques"
        assert entry["build_id"] == "abc123"
        assert entry["document"] == "css/C9.html"
        assert "stage" not in entry

    def test_json_keeps_markup(self):
        """Titles with inline markup are emitted unescaped."""
        entry = json.loads(JsonFormatter().format(_record(msg="H37: Using <code>alt</code> …")))
        assert entry["msg"] == "H37: Using <code>alt</code> …"


class TestWithContext:
    """Tests for context injection."""

    def test_only_given_fields(self):
        adapter = with_context(logging.getLogger("wcag_graph.test"), stage="taxonomy")
        assert isinstance(adapter, ContextAdapter)
        assert adapter.extra == {"stage": "taxonomy"}

    def test_fields_reach_records(self, caplog):
        logger = logging.getLogger("wcag_graph.test")
        with caplog.at_level(logging.INFO, logger="wcag_graph"):
            with_context(logger, build_id="b1", document="understanding/20/keyboard.html").info(
                "hello"
            )
        (record,) = caplog.records
        assert record.build_id == "b1"
        assert record.document == "understanding/20/keyboard.html"

    def test_call_extra_merged(self, caplog):
        logger = logging.getLogger("wcag_graph.test")
        with caplog.at_level(logging.INFO, logger="wcag_graph"):
            with_context(logger, stage="versions").info("hi", extra={"document": "understanding/21/orientation.html"})
        (record,) = caplog.records
        assert record.stage == "versions"
        assert record.document == "understanding/21/orientation.html"


class TestSetupBuildLogger:
    """Tests for setup_build_logger."""

    def test_console_handler(self, restore_package_logger):
        logger = setup_build_logger(LoggingOptions(level="debug"))
        assert logger.name == ROOT_LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, TextFormatter)

    def test_reconfigure_does_not_duplicate(self, restore_package_logger):
        setup_build_logger()
        logger = setup_build_logger(LoggingOptions(json_logs=True))
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)

    def test_file_handler(self, tmp_path, restore_package_logger):
        log_file = tmp_path / "logs" / "build.log"
        logger = setup_build_logger(
            LoggingOptions(json_logs=True, enable_console=False, log_file=log_file)
        )
        logging.getLogger("wcag_graph.ingestion").info("Located 3 documents")
        for handler in logger.handlers:
            handler.flush()

        (line,) = log_file.read_text(encoding="utf-8").splitlines()
        assert json.loads(line)["msg"] == "Located 3 documents"
