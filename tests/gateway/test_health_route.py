"""健康检查路由测试"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


class TestHealth:
    """GET /health"""

    async def test_health_ok(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestReady:
    """GET /ready"""

    async def test_ready_reports_artifact_count(
        self, client: AsyncClient, solid_png: bytes
    ):
        resp = await client.get("/ready")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ready"
        assert data["checks"]["artifact_store"] == "ok"
        assert data["checks"]["artifact_count"] == 0

        await client.post("/upload", content=solid_png)

        resp = await client.get("/ready")
        assert resp.json()["checks"]["artifact_count"] == 1


class TestReadyUninitialized:
    """lifespan 未运行时 /ready 返回 503"""

    @pytest_asyncio.fixture
    async def bare_client(self, monkeypatch):
        monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
        from bitcrush.gateway.main import create_app

        app = create_app()
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac

    async def test_not_ready(self, bare_client: AsyncClient):
        resp = await bare_client.get("/ready")
        assert resp.status_code == 503
        data = resp.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["artifact_store"] == "unavailable"
        assert data["checks"]["image_service"] == "unavailable"
