"""bitcrush Core Imaging -- 降质变换引擎"""

from .bitcrush import BitcrushPlan, apply_bitcrush, bitcrush, hue_rotate, plan_bitcrush
from .codec import decode_image, decode_intermediate, encode_jpeg, to_rgb

__all__ = [
    "BitcrushPlan",
    "apply_bitcrush",
    "bitcrush",
    "decode_image",
    "decode_intermediate",
    "encode_jpeg",
    "hue_rotate",
    "plan_bitcrush",
    "to_rgb",
]
