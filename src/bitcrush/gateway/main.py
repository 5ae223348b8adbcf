"""FastAPI 应用主文件

app 创建 + lifespan 管理：Artifact Store / ImageService 初始化 + 路由注册。
Store 进程级唯一，经 app.state 共享给所有请求处理器。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from bitcrush.core.exceptions import BitcrushError
from bitcrush.core.store import create_artifact_store
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import load_gateway_config
from .errors import bitcrush_error_handler
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, images, upload
from .services.image_service import ImageService

log = structlog.get_logger()

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时创建 Store 与 ImageService"""
    gateway_config = load_gateway_config()
    app.state.gateway_config = gateway_config

    artifact_store = create_artifact_store()
    app.state.artifact_store = artifact_store
    app.state.image_service = ImageService(
        artifact_store,
        max_upload_bytes=gateway_config.max_upload_bytes,
        max_concurrent_transforms=gateway_config.max_concurrent_transforms,
    )
    log.info(
        "gateway_started",
        max_upload_bytes=gateway_config.max_upload_bytes,
        max_concurrent_transforms=gateway_config.max_concurrent_transforms,
    )

    yield

    # 内存 Store 不做持久化，随进程退出释放
    log.info("gateway_stopped", artifact_count=await artifact_store.count())


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="bitcrush",
        version="0.1.0",
        description="上传图片，随机降质，按 id 检索",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    # 初始化日志
    setup_logging()
    setup_logfire(app)

    app.add_exception_handler(BitcrushError, bitcrush_error_handler)

    # 注册路由
    app.include_router(upload.router, tags=["upload"])
    app.include_router(images.router, tags=["images"])
    app.include_router(health.router, tags=["health"])

    # 挂载上传页面静态文件（static/ -> /）
    # 在所有 API 路由之后挂载，确保 API 优先匹配
    if STATIC_DIR.exists():
        app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="frontend")

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
