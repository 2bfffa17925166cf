"""
分页模块 - 长图跨页偏移计算
"""

from .paginator import A4_HEIGHT_MM, A4_WIDTH_MM, Paginator

__all__ = [
    "Paginator",
    "A4_WIDTH_MM",
    "A4_HEIGHT_MM",
]
