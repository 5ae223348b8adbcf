"""Store Protocol 接口定义

使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from typing import Protocol

from ..models.artifact import Artifact


class ArtifactStore(Protocol):
    """Artifact 存储接口

    只写一次、多次读取：不提供 delete / update。
    """

    async def insert(self, artifact_id: str, artifact: Artifact) -> None:
        """写入条目（key 已存在时静默覆盖）"""
        ...

    async def lookup(self, artifact_id: str) -> Artifact | None:
        """根据 artifact_id 查询，不存在返回 None"""
        ...

    async def count(self) -> int:
        """当前条目数量"""
        ...
