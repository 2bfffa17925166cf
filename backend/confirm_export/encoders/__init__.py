"""
编码模块 - 产物编码

子模块：
- raster: PNG（截图原样输出）
- pdf: A4竖版多页PDF
- text: Markdown + 段落选择摘要
"""

from .pdf import PDFEncoder, count_pdf_pages
from .raster import PNGEncoder
from .text import MarkdownEncoder

__all__ = [
    "PNGEncoder",
    "PDFEncoder",
    "MarkdownEncoder",
    "count_pdf_pages",
]
