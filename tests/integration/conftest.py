"""集成测试配置 -- 运行真实 lifespan 的 app + httpx AsyncClient"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def live_app(monkeypatch):
    """通过 lifespan 初始化 Store 与 ImageService"""
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
    monkeypatch.setenv("BITCRUSH_MAX_CONCURRENT_TRANSFORMS", "2")

    from bitcrush.gateway.main import create_app

    app = create_app()
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def live_client(live_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=live_app),
        base_url="http://test",
    ) as ac:
        yield ac
