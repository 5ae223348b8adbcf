"""错误映射 -- 错误种类 -> 对外状态码 + 通用提示

error_signal 为纯函数；bitcrush_error_handler 负责记录内部细节并返回
{"error": {"code": ..., "message": ...}} 响应体，内部细节不外泄。
"""

from typing import NamedTuple

import structlog
from bitcrush.core.exceptions import (
    ArtifactNotFoundError,
    BitcrushError,
    DecodeError,
    EncodeError,
    InvalidIdentifierError,
    PayloadTooLargeError,
)
from starlette.requests import Request
from starlette.responses import JSONResponse

log = structlog.get_logger()


class ErrorSignal(NamedTuple):
    """对外可见的错误信号"""

    status_code: int
    code: str
    message: str


GENERIC_FAILURE = ErrorSignal(500, "INTERNAL_ERROR", "Something went wrong, sorry!")

ERROR_SIGNALS: dict[type[BitcrushError], ErrorSignal] = {
    DecodeError: ErrorSignal(
        400, "IMAGE_DECODE_FAILED", "Uploaded file is not a supported image"
    ),
    EncodeError: ErrorSignal(500, "IMAGE_ENCODE_FAILED", "Something went wrong, sorry!"),
    PayloadTooLargeError: ErrorSignal(413, "PAYLOAD_TOO_LARGE", "Uploaded image is too large"),
    InvalidIdentifierError: ErrorSignal(400, "INVALID_IMAGE_ID", "Invalid image id"),
    ArtifactNotFoundError: ErrorSignal(404, "IMAGE_NOT_FOUND", "Image not found"),
}


def error_signal(exc: BitcrushError) -> ErrorSignal:
    """将错误种类映射为对外信号（按 MRO 匹配，未知种类返回通用 500）"""
    for cls in type(exc).__mro__:
        signal = ERROR_SIGNALS.get(cls)
        if signal is not None:
            return signal
    return GENERIC_FAILURE


async def bitcrush_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """FastAPI 异常处理器 -- 记录内部细节，返回通用提示"""
    signal = error_signal(exc) if isinstance(exc, BitcrushError) else GENERIC_FAILURE
    log_method = log.aerror if signal.status_code >= 500 else log.ainfo
    await log_method(
        "request_failed",
        error_code=signal.code,
        status_code=signal.status_code,
        error_type=type(exc).__name__,
        detail=str(exc),
    )
    return JSONResponse(
        status_code=signal.status_code,
        content={"error": {"code": signal.code, "message": signal.message}},
    )
