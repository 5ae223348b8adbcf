"""ImageService -- 图片上传降质与检索业务逻辑

Submit 流程：
1. 校验上传大小
2. 在工作线程中解码 -> bitcrush -> 以固定质量编码 JPEG（不阻塞事件循环）
3. 生成 ArtifactId
4. 写入 Store（写入完成后才返回，保证随后的检索可见）

任何一步失败都不会写入 Store。
"""

import asyncio
import random
from datetime import UTC, datetime

import structlog
from bitcrush.core.config import (
    DEFAULT_MAX_CONCURRENT_TRANSFORMS,
    DEFAULT_MAX_UPLOAD_BYTES,
    JPEG_QUALITY,
    OUTPUT_CONTENT_TYPE,
)
from bitcrush.core.exceptions import PayloadTooLargeError
from bitcrush.core.ids import new_artifact_id, parse_artifact_token
from bitcrush.core.imaging import bitcrush, decode_image, encode_jpeg
from bitcrush.core.models import Artifact
from bitcrush.core.store import ArtifactStore, compute_hash_and_size

log = structlog.get_logger()


def crush_upload(
    data: bytes,
    rng: random.Random,
    output_quality: int = JPEG_QUALITY,
) -> tuple[bytes, tuple[int, int]]:
    """同步执行解码 + 降质 + 最终编码（CPU 密集，在工作线程中运行）

    Returns:
        (jpeg_bytes, (width, height))

    Raises:
        DecodeError: 上传内容不是可识别的图片
        EncodeError: 中间或最终编码失败
    """
    image = decode_image(data)
    crushed = bitcrush(image, rng)
    return encode_jpeg(crushed, output_quality), crushed.size


class ImageService:
    """图片业务服务"""

    def __init__(
        self,
        store: ArtifactStore,
        rng: random.Random | None = None,
        *,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        max_concurrent_transforms: int = DEFAULT_MAX_CONCURRENT_TRANSFORMS,
        output_quality: int = JPEG_QUALITY,
    ) -> None:
        self._store = store
        self._rng = rng or random.Random()
        self._max_upload_bytes = max_upload_bytes
        self._output_quality = output_quality
        self._transform_slots = asyncio.Semaphore(max_concurrent_transforms)

    @property
    def max_upload_bytes(self) -> int:
        return self._max_upload_bytes

    async def submit(self, data: bytes) -> Artifact:
        """上传图片并返回已存储的降质产物

        Args:
            data: 上传的原始字节

        Returns:
            已写入 Store 的 Artifact

        Raises:
            PayloadTooLargeError: 超过上传大小上限
            DecodeError / EncodeError: 变换失败
        """
        if len(data) > self._max_upload_bytes:
            raise PayloadTooLargeError(len(data), self._max_upload_bytes)

        async with self._transform_slots:
            content, (width, height) = await asyncio.to_thread(
                crush_upload, data, self._rng, self._output_quality
            )

        artifact_id = new_artifact_id()
        hash_hex, size = compute_hash_and_size(content)
        artifact = Artifact(
            artifact_id=artifact_id,
            content_type=OUTPUT_CONTENT_TYPE,
            content=content,
            size=size,
            hash=hash_hex,
            width=width,
            height=height,
            created_at=datetime.now(UTC),
        )
        await self._store.insert(artifact_id, artifact)

        log.info(
            "image_submitted",
            artifact_id=artifact_id,
            upload_bytes=len(data),
            size=size,
            width=width,
            height=height,
        )
        return artifact

    async def retrieve(self, token: str) -> Artifact | None:
        """根据 `<id>.<ext>` token 检索产物

        Returns:
            Artifact，不存在时返回 None

        Raises:
            InvalidIdentifierError: token 中没有合法 id
        """
        artifact_id = parse_artifact_token(token)
        return await self._store.lookup(artifact_id)
