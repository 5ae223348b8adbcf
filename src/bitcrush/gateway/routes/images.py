"""图片检索路由

GET /images/{name}: name 形如 "<id>.jpg"，返回存储的字节与 MIME 类型。
GET /images、/images/: 缺少 id，返回非法标识错误。
产物不可变，可长期缓存。
"""

import structlog
from bitcrush.core.exceptions import ArtifactNotFoundError, InvalidIdentifierError
from fastapi import APIRouter, Depends
from starlette.responses import Response

from ..deps import get_image_service
from ..services.image_service import ImageService

log = structlog.get_logger()

router = APIRouter()

IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"


@router.get("/images")
@router.get("/images/", include_in_schema=False)
async def get_image_without_id():
    """路径中缺少 id 按非法标识处理"""
    raise InvalidIdentifierError("")


@router.get("/images/{name}")
async def get_image(
    name: str,
    service: ImageService = Depends(get_image_service),
):
    """按 token 检索降质图片

    - 存在返回 200 + 图片字节
    - id 格式非法返回 400
    - 不存在返回 404
    """
    artifact = await service.retrieve(name)
    if artifact is None:
        log.info("image_not_found", token=name)
        raise ArtifactNotFoundError(name)

    log.debug("image_served", artifact_id=artifact.artifact_id, size=artifact.size)
    return Response(
        content=artifact.content,
        media_type=artifact.content_type,
        headers={
            "Cache-Control": IMMUTABLE_CACHE_CONTROL,
            "ETag": f'"{artifact.hash}"',
        },
    )
