"""InMemoryArtifactStore -- 进程内共享的 ArtifactId -> Artifact 映射

整个 dict 由一把读写锁整体保护：
- lookup / count 走读锁，可与其他读并发
- insert 走写锁，独占期间阻塞所有读写
变换在取锁之前已经完成，临界区内只有一次 dict 赋值。
进程生命周期内只增不减（不做淘汰）。
"""

import hashlib

import structlog

from ..models.artifact import Artifact
from .rwlock import ReadWriteLock

log = structlog.get_logger()


def compute_hash_and_size(content: bytes) -> tuple[str, int]:
    """计算 SHA-256 hash 和内容大小

    Args:
        content: 原始内容字节

    Returns:
        (sha256_hex, size_bytes) 元组
    """
    return hashlib.sha256(content).hexdigest(), len(content)


class InMemoryArtifactStore:
    """ArtifactStore 的内存实现"""

    def __init__(self) -> None:
        self._artifacts: dict[str, Artifact] = {}
        self._lock = ReadWriteLock()

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    async def insert(self, artifact_id: str, artifact: Artifact) -> None:
        """写入 Artifact（last-write-wins）"""
        async with self._lock.writer():
            overwritten = artifact_id in self._artifacts
            self._artifacts[artifact_id] = artifact
        if overwritten:
            log.warning("artifact_id_collision", artifact_id=artifact_id)

    async def lookup(self, artifact_id: str) -> Artifact | None:
        """根据 artifact_id 查询 Artifact"""
        async with self._lock.reader():
            return self._artifacts.get(artifact_id)

    async def count(self) -> int:
        """当前存储的 Artifact 数量"""
        async with self._lock.reader():
            return len(self._artifacts)
