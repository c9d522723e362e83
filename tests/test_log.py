"""
日志模块单元测试

覆盖:
- EnhancedFormatter 的 text / json 输出
- LoggerAdapter 的两种格式化风格
- LoggerAdapter 记录的调用位置
"""

import json
import logging
import sys

import pytest

from pwt.indifferent.indifferent_dict import IndifferentDict
from pwt.indifferent.log.log_helpers import (
    EnhancedFormatter,
    LoggerAdapter,
    get_logger_adapter,
)
from pwt.indifferent.symbol import Symbol


@pytest.fixture
def record():
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="hello %s",
        args=("world",),
        exc_info=None,
    )


@pytest.fixture
def adapter():
    return get_logger_adapter("pwt.indifferent.test.adapter", component="test")


class TestEnhancedFormatter:
    """测试格式化器"""

    def test_text_format(self, record):
        formatter = EnhancedFormatter("{levelname}: {message}")
        assert formatter.format(record) == "INFO: hello world"

    def test_json_format_converts_symbols(self, record):
        record.params = IndifferentDict({Symbol("a"): {Symbol("b"): Symbol("c")}})
        out = json.loads(EnhancedFormatter(output_format="json").format(record))
        assert out["message"] == "hello world"
        assert out["level"] == "INFO"
        assert out["params"] == {"a": {"b": "c"}}

    def test_json_format_exception(self, record):
        try:
            raise ValueError("boom")
        except ValueError:
            record.exc_info = sys.exc_info()
        out = json.loads(EnhancedFormatter(output_format="json").format(record))
        assert out["exception"]["$type"] == "builtins.ValueError"
        assert out["exception"]["message"] == "boom"


class TestLoggerAdapter:
    """测试日志适配器"""

    def test_adapter_styles(self, adapter, caplog):
        with caplog.at_level(logging.DEBUG, logger=adapter.logger.name):
            adapter.info("percent %s", "style")
            adapter.infof("brace {key}", key="value")

        first, second = caplog.records
        assert first.getMessage() == "percent style"
        assert first.component == "test"
        assert second.key == "value"
        assert EnhancedFormatter("{message}").format(second) == "brace value"

    def test_level_methods_record_caller(self, adapter, caplog):
        with caplog.at_level(logging.DEBUG, logger=adapter.logger.name):
            adapter.debug("a")
            adapter.warningf("b")

        assert [r.funcName for r in caplog.records] == [
            "test_level_methods_record_caller",
            "test_level_methods_record_caller",
        ]

    def test_log_methods_record_caller(self, adapter, caplog):
        with caplog.at_level(logging.DEBUG, logger=adapter.logger.name):
            adapter.log(logging.INFO, "a")
            adapter.logf(logging.ERROR, "b {x}", x=1)

        assert [r.funcName for r in caplog.records] == [
            "test_log_methods_record_caller",
            "test_log_methods_record_caller",
        ]
        assert caplog.records[1].levelno == logging.ERROR

    def test_explicit_stacklevel_is_relative_to_caller(self, adapter, caplog):
        def helper():
            adapter.info("from helper", stacklevel=2)

        with caplog.at_level(logging.DEBUG, logger=adapter.logger.name):
            helper()

        assert caplog.records[0].funcName == (
            "test_explicit_stacklevel_is_relative_to_caller"
        )

    def test_adapter_from_logger(self, caplog):
        adapter = LoggerAdapter(logging.getLogger("pwt.indifferent.test.plain"))
        with caplog.at_level(logging.INFO, logger=adapter.logger.name):
            adapter.error("x=%d", 1)
        assert caplog.records[0].getMessage() == "x=1"
