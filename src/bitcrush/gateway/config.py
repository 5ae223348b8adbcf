"""GatewayConfig -- 网关运行配置加载

从环境变量加载配置；数值非法时记录告警并回退默认值，不阻塞启动。
"""

import os

import structlog
from bitcrush.core.config import (
    DEFAULT_MAX_CONCURRENT_TRANSFORMS,
    DEFAULT_MAX_UPLOAD_BYTES,
)
from pydantic import BaseModel, Field

log = structlog.get_logger()


class GatewayConfig(BaseModel):
    """网关配置 -- 从环境变量加载

    环境变量:
        BITCRUSH_HOST: 监听地址（默认 0.0.0.0）
        BITCRUSH_PORT: 监听端口（默认 3000）
        BITCRUSH_MAX_UPLOAD_BYTES: 上传大小上限（默认 20 MiB）
        BITCRUSH_MAX_CONCURRENT_TRANSFORMS: 同时运行的变换数量（默认 4）
    """

    host: str = Field(default="0.0.0.0", description="监听地址")
    port: int = Field(default=3000, ge=1, le=65535, description="监听端口")
    max_upload_bytes: int = Field(
        default=DEFAULT_MAX_UPLOAD_BYTES,
        ge=1,
        description="上传大小上限（字节）",
    )
    max_concurrent_transforms: int = Field(
        default=DEFAULT_MAX_CONCURRENT_TRANSFORMS,
        ge=1,
        description="同时运行的变换数量",
    )


_INT_ENV_VARS: dict[str, str] = {
    "BITCRUSH_PORT": "port",
    "BITCRUSH_MAX_UPLOAD_BYTES": "max_upload_bytes",
    "BITCRUSH_MAX_CONCURRENT_TRANSFORMS": "max_concurrent_transforms",
}


def load_gateway_config() -> GatewayConfig:
    """从环境变量加载网关配置

    Returns:
        GatewayConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("BITCRUSH_HOST"):
        kwargs["host"] = val

    for env_var, field_name in _INT_ENV_VARS.items():
        val = os.environ.get(env_var)
        if not val:
            continue
        try:
            parsed = int(val)
        except ValueError:
            parsed = None
        default = GatewayConfig.model_fields[field_name].default
        if parsed is None or parsed < 1 or (field_name == "port" and parsed > 65535):
            log.warning(
                "invalid_gateway_config",
                env_var=env_var,
                value=val,
                fallback=default,
            )
            # 使用默认值，不阻塞启动
            continue
        kwargs[field_name] = parsed

    return GatewayConfig(**kwargs)
