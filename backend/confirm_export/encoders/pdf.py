"""
PDF编码器 - 长图分页输出为A4竖版PDF

职责：
1. 按页序列逐页绘制整图（按页偏移粘贴，页边界自然裁切）
2. 页面固定竖版，不随内容宽高比变化
3. PDF页数统计（日志/命令行摘要用）

依赖：
- Pillow: 逐页合成与多页PDF写出

测试要点：
- test_pdf_page_count: 页数与分页结果一致
- test_pdf_page_size: 页面尺寸为 210x297mm
- test_pdf_offsets: 第二页从整图第 297mm 处开始
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path

from PIL import Image

from ..config import get_config
from ..interfaces import EncodeError, IRasterEncoder
from ..models import ArtifactType, CapturedRaster, ExportArtifact, ExportContext, PageSequence
from ..naming import FilenameComposer
from ..pagination import Paginator

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4
PAGE_BACKGROUND = "#ffffff"

# "/Type /Page"，排除 "/Type /Pages"
_PAGE_MARKER_RE = re.compile(rb"/Type\s*/Page(?![A-Za-z])")


class PDFEncoder(IRasterEncoder):
    """PDF编码器实现"""

    def __init__(
        self,
        composer: FilenameComposer | None = None,
        paginator: Paginator | None = None,
        page_width_mm: float | None = None,
        page_height_mm: float | None = None,
    ):
        config = get_config()
        self.composer = composer or FilenameComposer.from_config(config)
        self.paginator = paginator or Paginator()
        self.page_width_mm = page_width_mm or config.page.width_mm
        self.page_height_mm = page_height_mm or config.page.height_mm

    def encode(
        self,
        raster: CapturedRaster,
        context: ExportContext | None = None,
        pages: PageSequence | None = None,
    ) -> ExportArtifact:
        """编码PDF（未给出页序列时自行分页）"""
        if pages is None:
            pages = self.paginator.paginate(raster, self.page_width_mm, self.page_height_mm)

        payload = self.render(raster, pages)

        return ExportArtifact(
            filename=self.composer.compose(ArtifactType.PDF.extension, context),
            type=ArtifactType.PDF,
            payload=payload,
        )

    def compose_sheets(self, raster: CapturedRaster, pages: PageSequence) -> list[Image.Image]:
        """按页偏移把整图贴到页面画布上（超出页面部分被裁切）"""
        if raster.pixel_width <= 0 or raster.pixel_height <= 0:
            raise EncodeError(f"栅格尺寸非法: {raster.pixel_width}x{raster.pixel_height}px")
        if not pages.pages:
            raise EncodeError("页序列为空")

        try:
            image = raster.to_image().convert("RGB")
        except (OSError, ValueError) as e:
            raise EncodeError(f"栅格解码失败: {e}") from e

        # 整图宽度映射为页宽
        px_per_mm = raster.pixel_width / pages.page_width_mm
        sheet_size = (raster.pixel_width, max(1, round(pages.page_height_mm * px_per_mm)))

        sheets = []
        for page in pages.pages:
            sheet = Image.new("RGB", sheet_size, PAGE_BACKGROUND)
            sheet.paste(image, (0, round(page.vertical_offset_mm * px_per_mm)))
            sheets.append(sheet)
        return sheets

    def render(self, raster: CapturedRaster, pages: PageSequence) -> bytes:
        """逐页绘制并写出PDF字节"""
        sheets = self.compose_sheets(raster, pages)
        px_per_mm = raster.pixel_width / pages.page_width_mm

        buffer = io.BytesIO()
        first, *rest = sheets
        try:
            first.save(
                buffer,
                format="PDF",
                save_all=True,
                append_images=rest,
                resolution=px_per_mm * MM_PER_INCH,
            )
        except (OSError, ValueError) as e:
            raise EncodeError(f"PDF写出失败: {e}") from e

        logger.debug(
            f"PDF编码完成: {len(sheets)}页, 整图高 {pages.image_height_mm:.1f}mm"
        )
        return buffer.getvalue()


def count_pdf_pages(source: Path | bytes) -> int:
    """统计PDF页数（按 /Type /Page 标记计数）"""
    data = source if isinstance(source, bytes) else Path(source).read_bytes()
    return len(_PAGE_MARKER_RE.findall(data))
