"""依赖注入模块 -- 通过 FastAPI Depends 注入 ImageService

实例通过 app.state 管理，在 lifespan 中初始化。
/ready 直接读取 app.state，以便在未初始化时报告 503。
"""

from fastapi import Request

from .services.image_service import ImageService


def get_image_service(request: Request) -> ImageService:
    """从 app.state 获取 ImageService"""
    return request.app.state.image_service
