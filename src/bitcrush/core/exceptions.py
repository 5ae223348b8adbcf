"""bitcrush 异常体系

封闭的错误种类集合：解码失败、编码失败、非法标识符、未找到、上传过大。
网关层通过 bitcrush.gateway.errors 将每种错误映射为对外状态码。
"""


class BitcrushError(Exception):
    """bitcrush 基础异常"""

    def __init__(self, message: str, recoverable: bool = False) -> None:
        """
        Args:
            message: 错误描述（仅用于日志，不直接返回给调用方）
            recoverable: 调用方能否通过重新提交恢复
        """
        super().__init__(message)
        self.recoverable = recoverable


class DecodeError(BitcrushError):
    """上传字节无法识别或解析为图片"""

    def __init__(self, original_error: Exception | None = None) -> None:
        detail = f": {original_error}" if original_error else ""
        super().__init__(f"图片解码失败{detail}", recoverable=True)
        self.original_error = original_error


class EncodeError(BitcrushError):
    """中间或最终压缩图片无法序列化"""

    def __init__(self, original_error: Exception | None = None) -> None:
        detail = f": {original_error}" if original_error else ""
        super().__init__(f"图片编码失败{detail}", recoverable=True)
        self.original_error = original_error


class PayloadTooLargeError(BitcrushError):
    """上传内容超过大小上限"""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"上传内容过大: {size} > {limit} 字节", recoverable=True)
        self.size = size
        self.limit = limit


class InvalidIdentifierError(BitcrushError):
    """检索 token 中无法解析出合法的 ArtifactId"""

    def __init__(self, token: str) -> None:
        super().__init__(f"非法图片标识: {token!r}")
        self.token = token


class ArtifactNotFoundError(BitcrushError):
    """格式合法的 id 在 Store 中没有对应条目"""

    def __init__(self, artifact_id: str) -> None:
        super().__init__(f"图片不存在: {artifact_id}")
        self.artifact_id = artifact_id
