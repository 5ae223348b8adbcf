"""配置常量模块 -- 可通过环境变量覆盖

包含 bitcrush 变换参数、输出格式、上传大小与并发变换数量的默认值。
网关运行参数见 bitcrush.gateway.config。
"""

import os

# 最终输出 JPEG 质量（与每轮内部随机质量无关）
JPEG_QUALITY: int = int(os.environ.get("BITCRUSH_JPEG_QUALITY", "25"))

# 降质循环轮数
BITCRUSH_PASSES: int = 2

# 每轮中间 JPEG 质量的采样区间 [low, high)
INTERMEDIATE_QUALITY_RANGE: tuple[int, int] = (10, 30)

# 输出产物的 MIME 类型
OUTPUT_CONTENT_TYPE: str = "image/jpeg"

# 对外展示的扩展名（/images/<id>.jpg）
DISPLAY_EXTENSION: str = "jpg"

# 默认上传大小上限：20 MiB
DEFAULT_MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024

# 默认同时运行的变换数量
DEFAULT_MAX_CONCURRENT_TRANSFORMS: int = 4
