"""
分页模型 - 单页与页序列

对应导出PDF时每页的绘制偏移
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Page(BaseModel):
    """单页信息"""
    index: int = Field(..., ge=0, description="页序号(从0开始)")
    vertical_offset_mm: float = Field(..., description="整图在该页的绘制纵向偏移(<=0)")
    height_mm: float = Field(..., gt=0, description="该页实际绘制的内容高度")

    model_config = {"frozen": True}


class PageSequence(BaseModel):
    """页序列"""
    pages: tuple[Page, ...]
    image_height_mm: float
    page_width_mm: float = 210.0
    page_height_mm: float = 297.0

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.pages)

    def __getitem__(self, index: int) -> Page:
        return self.pages[index]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def covered_height_mm(self) -> float:
        """所有页绘制高度之和"""
        return sum(p.height_mm for p in self.pages)
