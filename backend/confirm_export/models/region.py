"""
区域模型 - 可视区域与渲染选项

VisualRegion 由调用方持有，流水线只读；RenderOptions 每次调用构造。
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

DARK_BACKGROUND = "#1f2937"
LIGHT_BACKGROUND = "#ffffff"


class RenderOptions(BaseModel):
    """渲染选项"""
    is_dark_theme: bool = False

    model_config = {"frozen": True}

    @property
    def background_color(self) -> str:
        """主题默认背景色（截图时可被 CaptureConfig 覆盖）"""
        return DARK_BACKGROUND if self.is_dark_theme else LIGHT_BACKGROUND


class VisualRegion(BaseModel):
    """页面上可寻址的渲染子树"""
    page: Any = Field(..., description="Playwright Page（或同接口对象）")
    selector: str = Field(..., description="定位区域根元素的CSS选择器")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    def describe(self) -> str:
        """日志用简述"""
        return f"region<{self.selector}>"
