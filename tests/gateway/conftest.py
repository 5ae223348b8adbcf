"""gateway 测试配置 -- FastAPI app + httpx AsyncClient fixture"""

import random
from collections.abc import AsyncGenerator

import pytest_asyncio
from bitcrush.core.store import create_artifact_store
from bitcrush.gateway.services.image_service import ImageService
from httpx import ASGITransport, AsyncClient

# 测试用上传上限：256 KiB
TEST_MAX_UPLOAD_BYTES = 256 * 1024


@pytest_asyncio.fixture
async def test_app(monkeypatch):
    """创建测试用 FastAPI app，手动初始化 lifespan 状态"""
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from bitcrush.gateway.main import create_app

    app = create_app()

    # 手动初始化（绕过 lifespan）
    store = create_artifact_store()
    app.state.artifact_store = store
    app.state.image_service = ImageService(
        store,
        random.Random(1234),
        max_upload_bytes=TEST_MAX_UPLOAD_BYTES,
    )

    yield app


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
