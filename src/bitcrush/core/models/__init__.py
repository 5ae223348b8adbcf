"""bitcrush Core Domain Models -- 公共类型导出"""

from .artifact import Artifact

__all__ = [
    "Artifact",
]
