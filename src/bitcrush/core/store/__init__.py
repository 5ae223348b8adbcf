"""bitcrush Core Store -- 进程内 Artifact 存储

提供工厂函数创建进程级唯一的 Store 实例。
"""

from .memory_store import InMemoryArtifactStore, compute_hash_and_size
from .protocols import ArtifactStore
from .rwlock import ReadWriteLock


def create_artifact_store() -> InMemoryArtifactStore:
    """创建 Artifact Store

    在应用 lifespan 中调用一次，通过 app.state 共享给所有请求处理器。
    """
    return InMemoryArtifactStore()


__all__ = [
    "ArtifactStore",
    "InMemoryArtifactStore",
    "ReadWriteLock",
    "compute_hash_and_size",
    "create_artifact_store",
]
