"""
截图模块 - 浏览器渲染与区域栅格化

子模块：
- renderer: 显式启停的无头浏览器
- region_capturer: 克隆-归一化-截图-丢弃
"""

from .region_capturer import RegionCapturer
from .renderer import BrowserRenderer

__all__ = [
    "BrowserRenderer",
    "RegionCapturer",
]
