"""
分页器 - 计算长图跨页的绘制偏移

职责：
1. 按页宽等比缩放，计算整图高度(mm)
2. 不超过一页：单页，偏移0
3. 超过一页：第k页偏移 -(k * 页高)，直到剩余高度<=0
4. 只计算偏移和页数，不做任何绘制

测试要点：
- test_single_page: 单页
- test_multi_page_count: 页数 = ceil(整图高/页高)
- test_exact_page_height: 恰好一页高不产生第二页
- test_zero_width: 零宽度抛 EncodeError
"""

from __future__ import annotations

from ..interfaces import EncodeError, IPaginator
from ..models import CapturedRaster, Page, PageSequence

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0


class Paginator(IPaginator):
    """分页器实现"""

    def paginate(
        self,
        raster: CapturedRaster,
        page_width_mm: float = A4_WIDTH_MM,
        page_height_mm: float = A4_HEIGHT_MM,
    ) -> PageSequence:
        """计算页序列"""
        if page_width_mm <= 0 or page_height_mm <= 0:
            raise EncodeError(f"页面尺寸非法: {page_width_mm}x{page_height_mm}mm")
        if raster.pixel_width <= 0 or raster.pixel_height <= 0:
            raise EncodeError(
                f"栅格尺寸非法: {raster.pixel_width}x{raster.pixel_height}px"
            )

        img_height_mm = raster.pixel_height * page_width_mm / raster.pixel_width

        if img_height_mm <= page_height_mm:
            pages = [Page(index=0, vertical_offset_mm=0.0, height_mm=img_height_mm)]
        else:
            pages = []
            k = 0
            while img_height_mm - k * page_height_mm > 0:
                remaining = img_height_mm - k * page_height_mm
                pages.append(
                    Page(
                        index=k,
                        vertical_offset_mm=-(k * page_height_mm),
                        height_mm=min(page_height_mm, remaining),
                    )
                )
                k += 1

        return PageSequence(
            pages=tuple(pages),
            image_height_mm=img_height_mm,
            page_width_mm=page_width_mm,
            page_height_mm=page_height_mm,
        )
