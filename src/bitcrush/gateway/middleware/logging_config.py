"""structlog 配置模块

BITCRUSH_LOG_FORMAT 选择渲染方式（dev 可读输出 / json 结构化输出），
BITCRUSH_LOG_LEVEL 控制根 logger 级别。uvicorn 自带 logger 统一交由
根 handler 渲染；日志字段中的图片字节只记录长度。
Logfire APM：LOGFIRE_SEND_TO_LOGFIRE 控制，false 时仅输出本地日志。
"""

import logging
import os
from typing import Literal

import structlog
from fastapi import FastAPI
from pydantic import BaseModel

# 交由根 logger 渲染的 uvicorn logger
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

LogFormat = Literal["dev", "json"]


class LogSettings(BaseModel):
    """日志设置"""

    format: LogFormat = "dev"
    level: int = logging.INFO


def load_log_settings() -> LogSettings:
    """从环境变量读取日志设置，未知取值回退默认"""
    fmt = os.environ.get("BITCRUSH_LOG_FORMAT", "dev").lower()
    level = logging.getLevelName(os.environ.get("BITCRUSH_LOG_LEVEL", "INFO").upper())
    return LogSettings(
        format=fmt if fmt in ("dev", "json") else "dev",
        level=level if isinstance(level, int) else logging.INFO,
    )


def summarize_binary_fields(
    logger: logging.Logger, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """将 bytes 字段替换为长度描述，避免图片内容进入日志"""
    for key, value in event_dict.items():
        if isinstance(value, bytes | bytearray):
            event_dict[key] = f"<{len(value)} bytes>"
    return event_dict


def build_renderer(log_format: LogFormat) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def _route_uvicorn_loggers() -> None:
    for name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True


def setup_logging() -> LogSettings:
    """初始化 structlog 与标准库 logging

    Returns:
        生效的 LogSettings
    """
    settings = load_log_settings()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        summarize_binary_fields,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=build_renderer(settings.format),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.level)

    _route_uvicorn_loggers()
    return settings


def setup_logfire(app: FastAPI) -> bool:
    """Logfire 可选初始化

    Returns:
        是否已启用 Logfire 追踪
    """
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return False
    try:
        import logfire

        logfire.configure(service_name="bitcrush")
        logfire.instrument_fastapi(app)
    except Exception as e:
        # Logfire 不可用时上传与检索照常运行
        structlog.get_logger().warning("logfire_init_failed", error=str(e))
        return False
    return True
