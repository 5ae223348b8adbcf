"""日志配置测试 -- 环境变量解析、渲染器选择、二进制字段摘要"""

import logging

import pytest
import structlog
from bitcrush.gateway.middleware.logging_config import (
    build_renderer,
    load_log_settings,
    setup_logfire,
    setup_logging,
    summarize_binary_fields,
)
from fastapi import FastAPI


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("BITCRUSH_LOG_FORMAT", raising=False)
    monkeypatch.delenv("BITCRUSH_LOG_LEVEL", raising=False)


class TestLoadLogSettings:
    """load_log_settings() 测试"""

    def test_defaults(self):
        settings = load_log_settings()
        assert settings.format == "dev"
        assert settings.level == logging.INFO

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("BITCRUSH_LOG_FORMAT", "JSON")
        monkeypatch.setenv("BITCRUSH_LOG_LEVEL", "debug")
        settings = load_log_settings()
        assert settings.format == "json"
        assert settings.level == logging.DEBUG

    def test_unknown_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("BITCRUSH_LOG_FORMAT", "xml")
        monkeypatch.setenv("BITCRUSH_LOG_LEVEL", "LOUD")
        settings = load_log_settings()
        assert settings.format == "dev"
        assert settings.level == logging.INFO


class TestRenderer:
    """build_renderer() 测试"""

    def test_json(self):
        assert isinstance(build_renderer("json"), structlog.processors.JSONRenderer)

    def test_dev(self):
        assert isinstance(build_renderer("dev"), structlog.dev.ConsoleRenderer)


class TestSummarizeBinaryFields:
    """图片字节只记录长度"""

    def test_bytes_replaced(self):
        event = {"event": "image_submitted", "content": b"\xff\xd8" * 10, "size": 20}
        result = summarize_binary_fields(None, "info", event)
        assert result["content"] == "<20 bytes>"
        assert result["size"] == 20
        assert result["event"] == "image_submitted"


class TestSetupLogging:
    """setup_logging() 测试"""

    def test_root_level_and_uvicorn_routing(self, monkeypatch):
        monkeypatch.setenv("BITCRUSH_LOG_LEVEL", "WARNING")
        setup_logging()

        assert logging.getLogger().level == logging.WARNING
        assert len(logging.getLogger().handlers) == 1
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            assert logging.getLogger(name).handlers == []
            assert logging.getLogger(name).propagate is True

        # 恢复默认级别，避免影响后续测试
        monkeypatch.setenv("BITCRUSH_LOG_LEVEL", "INFO")
        setup_logging()


class TestSetupLogfire:
    """setup_logfire() 测试"""

    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv("LOGFIRE_SEND_TO_LOGFIRE", raising=False)
        assert setup_logfire(FastAPI()) is False
