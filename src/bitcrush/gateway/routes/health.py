"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，验证 Artifact Store 可用并报告条目数量。
"""

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    """Readiness 检查 -- 验证核心依赖可用性

    检查项：
    1. artifact_store: Store 已初始化且可读
    2. artifact_count: 当前条目数量
    3. image_service: 上传服务已初始化
    """
    checks: dict = {}
    all_ok = True

    # 1. Artifact Store 可读性检查
    store = getattr(request.app.state, "artifact_store", None)
    if store is None:
        checks["artifact_store"] = "unavailable"
        all_ok = False
    else:
        checks["artifact_store"] = "ok"
        checks["artifact_count"] = await store.count()

    # 2. ImageService 检查
    if getattr(request.app.state, "image_service", None) is None:
        checks["image_service"] = "unavailable"
        all_ok = False
    else:
        checks["image_service"] = "ok"

    if not all_ok:
        log.warning("readiness_check_failed", checks=checks)

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
        },
    )
