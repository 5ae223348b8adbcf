"""Bitcrush 降质算法

结构确定、参数随机：
1. 记录原始尺寸 (W, H)
2. 循环前一次性采样中间尺寸 tempW ∈ [W//2, 2W)、tempH ∈ [H//2, 2H)
3. 每轮：最近邻缩放到中间尺寸 -> 旋转 180° -> 色相旋转 180°
   -> 以 [10, 30) 随机质量编码 JPEG -> 解码 -> 最近邻缩放回 (W, H)
4. 两轮后返回

两次旋转与两次色相反转相互抵消，压缩损失逐轮累积。
随机源可注入（random.Random），测试可替换为固定种子。
"""

import random
from collections.abc import Sequence

import structlog
from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

from ..config import BITCRUSH_PASSES, INTERMEDIATE_QUALITY_RANGE
from .codec import decode_intermediate, encode_jpeg, to_rgb

log = structlog.get_logger()

# Pillow HSV 模式中色相的取值级数（0-255）
_HUE_STEPS = 256


class BitcrushPlan(BaseModel):
    """一次降质的全部随机参数"""

    model_config = ConfigDict(frozen=True)

    original_size: tuple[int, int] = Field(description="原始尺寸 (W, H)")
    intermediate_size: tuple[int, int] = Field(description="中间尺寸，所有轮次共用")
    qualities: tuple[int, ...] = Field(description="每轮中间 JPEG 质量")


def plan_bitcrush(
    size: Sequence[int],
    rng: random.Random,
    passes: int = BITCRUSH_PASSES,
    quality_range: tuple[int, int] = INTERMEDIATE_QUALITY_RANGE,
) -> BitcrushPlan:
    """采样降质参数

    下界至少为 1：宽或高为 1 像素时不会采样出 0。
    上界不做裁剪：边长超过 32767 像素时中间尺寸可能超出 JPEG 的
    65500 像素边长上限，此时中间编码以 EncodeError 失败。

    Args:
        size: 原始尺寸 (W, H)
        rng: 随机源
        passes: 轮数
        quality_range: 中间质量区间 [low, high)

    Returns:
        BitcrushPlan
    """
    width, height = size
    temp_width = rng.randrange(max(1, width // 2), 2 * width)
    temp_height = rng.randrange(max(1, height // 2), 2 * height)
    low, high = quality_range
    qualities = tuple(rng.randrange(low, high) for _ in range(passes))
    return BitcrushPlan(
        original_size=(width, height),
        intermediate_size=(temp_width, temp_height),
        qualities=qualities,
    )


def hue_rotate(image: Image.Image, degrees: int = 180) -> Image.Image:
    """在 HSV 空间旋转色相，饱和度与明度不变

    输入须为 RGB，输出为 RGB。
    """
    shift = round(degrees / 360 * _HUE_STEPS) % _HUE_STEPS
    if shift == 0:
        return image.copy()
    hue, saturation, value = image.convert("HSV").split()
    lut = [(level + shift) % _HUE_STEPS for level in range(_HUE_STEPS)]
    hue = hue.point(lut)
    return Image.merge("HSV", (hue, saturation, value)).convert("RGB")


def apply_bitcrush(image: Image.Image, plan: BitcrushPlan) -> Image.Image:
    """按给定参数执行降质循环

    Raises:
        EncodeError: 中间 JPEG 编码或回读失败
    """
    current = to_rgb(image)
    for quality in plan.qualities:
        current = current.resize(plan.intermediate_size, Image.Resampling.NEAREST)
        current = current.transpose(Image.Transpose.ROTATE_180)
        current = hue_rotate(current, 180)
        encoded = encode_jpeg(current, quality)
        current = decode_intermediate(encoded).resize(
            plan.original_size, Image.Resampling.NEAREST
        )
    return current


def bitcrush(
    image: Image.Image,
    rng: random.Random | None = None,
    passes: int = BITCRUSH_PASSES,
) -> Image.Image:
    """对图片执行 bitcrush 降质，输出尺寸与输入一致

    Args:
        image: 已解码图片（任意像素模式）
        rng: 随机源，None 时使用新的 random.Random()
        passes: 轮数，默认 2

    Returns:
        降质后的 RGB 图片
    """
    rng = rng or random.Random()
    plan = plan_bitcrush(image.size, rng, passes)
    result = apply_bitcrush(image, plan)
    log.debug(
        "bitcrush_completed",
        original_size=plan.original_size,
        intermediate_size=plan.intermediate_size,
        qualities=plan.qualities,
    )
    return result
