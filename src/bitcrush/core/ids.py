"""ArtifactId 生成与解析

ArtifactId 为 ULID：48 位毫秒时间戳 + 80 位随机数，Crockford base32 编码，
固定 26 字符，URL 安全，按创建时间字典序可排序。
Crockford 字母表不包含 "."，因此检索 token 可按第一个 "." 切分。
"""

from ulid import ULID

from .config import DISPLAY_EXTENSION
from .exceptions import InvalidIdentifierError

# ULID 文本长度
ARTIFACT_ID_LENGTH: int = 26

# 检索 token 中 id 与展示扩展名之间的分隔符
TOKEN_DELIMITER: str = "."

_CROCKFORD_ALPHABET = frozenset("0123456789ABCDEFGHJKMNPQRSTVWXYZ")


def new_artifact_id() -> str:
    """生成新的 ArtifactId"""
    return str(ULID())


def parse_artifact_token(token: str) -> str:
    """从 `<id>.<ext>` 形式的 token 中解析 ArtifactId

    取第一个分隔符之前的片段并按 ULID 校验。

    Args:
        token: 路径中的图片名，如 "01J...XYZ.jpg"

    Returns:
        规范化（大写）的 ArtifactId

    Raises:
        InvalidIdentifierError: 片段为空或不是合法 ULID
    """
    segment = token.split(TOKEN_DELIMITER, 1)[0].upper()
    if (
        len(segment) != ARTIFACT_ID_LENGTH
        or not set(segment) <= _CROCKFORD_ALPHABET
        # 首字符超过 "7" 时 128 位溢出
        or segment[0] > "7"
    ):
        raise InvalidIdentifierError(token)
    try:
        return str(ULID.from_str(segment))
    except ValueError as e:
        raise InvalidIdentifierError(token) from e


def artifact_src(artifact_id: str, extension: str = DISPLAY_EXTENSION) -> str:
    """构造对外引用路径 /images/<id>.<ext>"""
    return f"/images/{artifact_id}{TOKEN_DELIMITER}{extension}"
