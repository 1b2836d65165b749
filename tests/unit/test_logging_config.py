"""测试：日志配置（JSON / 文本格式）"""

import json
import logging

import pytest

from flowcanvas.config import Settings
from flowcanvas.logging_config import JsonFormatter, TextFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="flowcanvas.domain.services.graph_validator",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="workflow_graph_validation",
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    def test_json_formatter_includes_extra_fields(self):
        line = JsonFormatter().format(_record(node_count=2, violation="missing_trigger"))

        payload = json.loads(line)
        assert payload["message"] == "workflow_graph_validation"
        assert payload["level"] == "INFO"
        assert payload["node_count"] == 2
        assert payload["violation"] == "missing_trigger"
        assert "pathname" not in payload

    def test_text_formatter_appends_extra_fields(self):
        line = TextFormatter().format(_record(workflow_id="wf_1"))

        assert "[INFO]" in line
        assert "workflow_graph_validation" in line
        assert line.endswith("workflow_id=wf_1")


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _reset_handlers(self):
        logger = logging.getLogger("flowcanvas")
        saved = list(logger.handlers)
        logger.handlers.clear()
        yield
        logger.handlers[:] = saved

    def test_configure_logging_is_idempotent(self):
        config = Settings(log_level="debug", log_format="json")

        logger = configure_logging(config)
        configure_logging(config)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)
