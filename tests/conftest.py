"""全局 pytest 配置 -- 测试图片构造 fixture"""

import io
import os
from collections.abc import Callable

import pytest
from PIL import Image

ImageBytesFactory = Callable[..., bytes]


def build_image_bytes(
    size: tuple[int, int] = (64, 64),
    mode: str = "RGB",
    color: int | tuple[int, ...] = 0,
    fmt: str = "PNG",
) -> bytes:
    """构造纯色图片并编码为字节"""
    image = Image.new(mode, size, color)
    buf = io.BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


def build_noise_image(size: tuple[int, int] = (64, 64)) -> Image.Image:
    """构造随机噪声 RGB 图片"""
    width, height = size
    return Image.frombytes("RGB", size, os.urandom(width * height * 3))


@pytest.fixture
def make_image_bytes() -> ImageBytesFactory:
    """图片字节工厂"""
    return build_image_bytes


@pytest.fixture
def solid_png() -> bytes:
    """64x64 纯色 PNG"""
    return build_image_bytes((64, 64), "RGB", (200, 40, 40), "PNG")


@pytest.fixture
def noise_image() -> Image.Image:
    """64x64 随机噪声图片"""
    return build_noise_image((64, 64))
