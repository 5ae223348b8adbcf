"""CLI 入口模块 -- python -m bitcrush.gateway

按 BITCRUSH_HOST / BITCRUSH_PORT 启动 uvicorn。
"""

import uvicorn

from .config import load_gateway_config


def main() -> None:
    """CLI 主入口"""
    config = load_gateway_config()
    # log_config=None：沿用 setup_logging() 的 structlog 配置
    uvicorn.run(
        "bitcrush.gateway.main:app",
        host=config.host,
        port=config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
