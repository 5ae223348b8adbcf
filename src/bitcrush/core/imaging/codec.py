"""图片编解码 -- Pillow 内存缓冲区读写

所有 Pillow 异常在此收敛为 DecodeError / EncodeError。
"""

import io
import struct

from PIL import Image, JpegImagePlugin, UnidentifiedImageError

from ..exceptions import DecodeError, EncodeError

# JPEG 可直接编码的模式
_JPEG_MODES = frozenset({"RGB", "L", "CMYK"})


def decode_image(data: bytes) -> Image.Image:
    """将字节解码为已加载像素数据的图片

    Raises:
        DecodeError: 空内容、无法识别的格式、损坏的数据或解压炸弹
    """
    if not data:
        raise DecodeError()
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            # 脱离底层缓冲区
            return img.copy()
    except (UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise DecodeError(e) from e
    except (OSError, SyntaxError, ValueError, EOFError, IndexError, struct.error) as e:
        # 截断或损坏的图片数据
        raise DecodeError(e) from e


def decode_intermediate(data: bytes) -> Image.Image:
    """回读降质过程中自身编码的中间 JPEG

    尺寸由降质计划决定，不经过上传内容的解压炸弹检查；
    回读失败属于变换内部错误，与上传内容无关。

    Raises:
        EncodeError: 中间 JPEG 无法回读
    """
    try:
        with JpegImagePlugin.JpegImageFile(io.BytesIO(data)) as img:
            img.load()
            return img.copy()
    except (OSError, SyntaxError, ValueError, EOFError, IndexError, struct.error) as e:
        raise EncodeError(e) from e


def to_rgb(image: Image.Image) -> Image.Image:
    """将任意像素模式规范化为 RGB（丢弃 alpha）

    Raises:
        EncodeError: 像素模式无法转换
    """
    if image.mode == "RGB":
        return image
    try:
        if image.mode == "P":
            image = image.convert("RGBA")
        return image.convert("RGB")
    except (ValueError, OSError) as e:
        raise EncodeError(e) from e


def encode_jpeg(image: Image.Image, quality: int) -> bytes:
    """将图片编码为 JPEG 字节

    Raises:
        EncodeError: 像素模式不支持或编码器失败
    """
    if image.mode not in _JPEG_MODES:
        raise EncodeError(ValueError(f"cannot write mode {image.mode} as JPEG"))
    buf = io.BytesIO()
    try:
        image.save(buf, format="JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise EncodeError(e) from e
    return buf.getvalue()
