"""TraceMiddleware

为图片检索请求绑定 artifact_id，贯穿该请求的全部日志。
artifact_id 取自 /images/<id>.<ext> 路径中第一个 "." 之前的片段。
"""

import structlog
from bitcrush.core.ids import ARTIFACT_ID_LENGTH, TOKEN_DELIMITER
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

_IMAGES_PREFIX = "/images/"


class TraceMiddleware(BaseHTTPMiddleware):
    """产物级追踪中间件 -- 为检索请求绑定 artifact_id"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path

        if path.startswith(_IMAGES_PREFIX):
            name = path[len(_IMAGES_PREFIX):]
            artifact_id = name.split(TOKEN_DELIMITER, 1)[0]
            # 非法长度的 id 交给路由报 400，不绑定
            if len(artifact_id) == ARTIFACT_ID_LENGTH:
                structlog.contextvars.bind_contextvars(artifact_id=artifact_id)

        return await call_next(request)
