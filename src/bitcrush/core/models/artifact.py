"""Artifact Domain Model

降质后的图片产物：content_type + 字节内容。
创建后不可变，hash 和 size 用于完整性校验与 ETag。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Artifact(BaseModel):
    """Artifact 数据模型 -- 一次成功上传对应一个产物

    frozen=True：创建后任何字段都不可修改。
    """

    model_config = ConfigDict(frozen=True)

    artifact_id: str = Field(description="唯一标识，ULID 格式")
    content_type: str = Field(default="image/jpeg", description="MIME 类型")
    content: bytes = Field(description="编码后的图片字节", min_length=1)
    size: int = Field(description="内容大小（字节）", ge=1)
    hash: str = Field(description="SHA-256 哈希")
    width: int = Field(description="图片宽度（像素）", ge=1)
    height: int = Field(description="图片高度（像素）", ge=1)
    created_at: datetime = Field(description="创建时间戳")
