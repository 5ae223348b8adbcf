"""图片上传路由

POST /upload: 请求体为原始图片字节，降质后返回 {"src": "/images/<id>.jpg"}。
"""

from bitcrush.core.exceptions import PayloadTooLargeError
from bitcrush.core.ids import artifact_src
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ..deps import get_image_service
from ..services.image_service import ImageService

router = APIRouter()


class UploadResponse(BaseModel):
    """上传响应"""

    src: str = Field(description="降质图片的检索路径")


@router.post("/upload", response_model=UploadResponse)
async def upload_image(
    request: Request,
    service: ImageService = Depends(get_image_service),
):
    """接收上传图片并降质

    - 成功返回 200 + src
    - 非图片内容返回 400
    - 超过大小上限返回 413
    """
    # Content-Length 超限时不读取请求体
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > service.max_upload_bytes:
        raise PayloadTooLargeError(int(declared), service.max_upload_bytes)

    body = await request.body()
    artifact = await service.submit(body)
    return UploadResponse(src=artifact_src(artifact.artifact_id))
