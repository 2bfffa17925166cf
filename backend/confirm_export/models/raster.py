"""
栅格模型 - 截图产出的不可变位图

像素尺寸允许为0，由分页/编码阶段以 EncodeError 拒绝。
"""

from __future__ import annotations

import io

from PIL import Image
from pydantic import BaseModel, Field


class CapturedRaster(BaseModel):
    """截图栅格（PNG编码）"""
    pixel_width: int = Field(..., ge=0)
    pixel_height: int = Field(..., ge=0)
    png_bytes: bytes = Field(..., repr=False, description="PNG编码的像素数据")
    scale: float = Field(2.0, description="相对区域逻辑尺寸的采样倍数")

    model_config = {"frozen": True}

    @classmethod
    def from_image(cls, image: Image.Image, scale: float = 2.0) -> CapturedRaster:
        """从PIL图像构造（编码为PNG）"""
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return cls(
            pixel_width=image.width,
            pixel_height=image.height,
            png_bytes=buffer.getvalue(),
            scale=scale,
        )

    @property
    def logical_size(self) -> tuple[float, float]:
        """区域逻辑尺寸（CSS像素）"""
        return self.pixel_width / self.scale, self.pixel_height / self.scale

    def to_image(self) -> Image.Image:
        """解码为PIL图像"""
        image = Image.open(io.BytesIO(self.png_bytes))
        image.load()
        return image
