"""
编码器单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_encoders.py -v
"""

import io

import pdfplumber
import pytest
from PIL import Image

from confirm_export.encoders import MarkdownEncoder, PDFEncoder, PNGEncoder, count_pdf_pages
from confirm_export.interfaces import EncodeError
from confirm_export.models import ArtifactType, CapturedRaster, ExportContext, Section
from confirm_export.pagination import Paginator

A4_WIDTH_PT = 210 / 25.4 * 72
A4_HEIGHT_PT = 297 / 25.4 * 72


class TestPNGEncoder:
    """PNG编码器测试"""

    def test_payload_identical(self, composer, make_raster):
        """测试产物字节与截图一致"""
        raster = make_raster(40, 30)
        artifact = PNGEncoder(composer).encode(raster)
        assert artifact.payload == raster.png_bytes
        assert artifact.type is ArtifactType.PNG
        assert artifact.filename == "claude-confirm-2026-10-18-090507.png"

    def test_context_in_filename(self, composer, make_raster):
        """测试文件名带项目标识"""
        artifact = PNGEncoder(composer).encode(make_raster(4, 4), ExportContext(project_name="demo"))
        assert artifact.filename.startswith("claude-confirm-demo-")

    def test_zero_size(self, composer):
        """测试零尺寸"""
        with pytest.raises(EncodeError):
            PNGEncoder(composer).encode(CapturedRaster(pixel_width=0, pixel_height=10, png_bytes=b""))

    def test_not_png(self, composer):
        """测试非PNG数据"""
        raster = CapturedRaster(pixel_width=1, pixel_height=1, png_bytes=b"GIF89a")
        with pytest.raises(EncodeError):
            PNGEncoder(composer).encode(raster)


class TestPDFEncoder:
    """PDF编码器测试"""

    @pytest.fixture
    def encoder(self, composer) -> PDFEncoder:
        return PDFEncoder(composer, paginator=Paginator(), page_width_mm=210, page_height_mm=297)

    def test_pdf_page_count(self, encoder: PDFEncoder, make_raster):
        """测试 1000x4000 输出3页A4"""
        artifact = encoder.encode(make_raster(1000, 4000))
        assert artifact.type is ArtifactType.PDF
        assert artifact.filename.endswith(".pdf")
        assert artifact.payload.startswith(b"%PDF")
        assert count_pdf_pages(artifact.payload) == 3

        with pdfplumber.open(io.BytesIO(artifact.payload)) as pdf:
            assert len(pdf.pages) == 3
            for page in pdf.pages:
                assert page.width == pytest.approx(A4_WIDTH_PT, abs=1.0)
                assert page.height == pytest.approx(A4_HEIGHT_PT, abs=1.5)

    def test_portrait_for_wide_content(self, encoder: PDFEncoder, make_raster):
        """测试宽图仍为竖版单页"""
        artifact = encoder.encode(make_raster(2000, 300))
        with pdfplumber.open(io.BytesIO(artifact.payload)) as pdf:
            assert len(pdf.pages) == 1
            assert pdf.pages[0].height > pdf.pages[0].width

    def test_pdf_offsets(self, encoder: PDFEncoder):
        """测试第二页从整图第297mm处开始"""
        # 宽210px -> 1px/mm；上297行红色，下103行蓝色
        image = Image.new("RGB", (210, 400), "#ff0000")
        image.paste(Image.new("RGB", (210, 103), "#0000ff"), (0, 297))
        raster = CapturedRaster.from_image(image)

        pages = Paginator().paginate(raster)
        sheets = encoder.compose_sheets(raster, pages)

        assert len(sheets) == 2
        assert sheets[0].size == (210, 297)
        assert sheets[0].getpixel((5, 5)) == (255, 0, 0)
        assert sheets[0].getpixel((5, 296)) == (255, 0, 0)
        assert sheets[1].getpixel((5, 5)) == (0, 0, 255)
        assert sheets[1].getpixel((5, 102)) == (0, 0, 255)
        # 最后一页剩余部分为白底
        assert sheets[1].getpixel((5, 200)) == (255, 255, 255)

    def test_precomputed_pages(self, encoder: PDFEncoder, make_raster):
        """测试使用外部给出的页序列"""
        raster = make_raster(100, 100)
        pages = Paginator().paginate(raster, page_width_mm=210, page_height_mm=50)
        artifact = encoder.encode(raster, pages=pages)
        assert count_pdf_pages(artifact.payload) == len(pages)

    def test_zero_width(self, encoder: PDFEncoder):
        """测试零宽度"""
        with pytest.raises(EncodeError):
            encoder.encode(CapturedRaster(pixel_width=0, pixel_height=100, png_bytes=b""))

    def test_corrupt_raster(self, encoder: PDFEncoder):
        """测试无法解码的栅格"""
        raster = CapturedRaster(pixel_width=10, pixel_height=10, png_bytes=b"not an image")
        with pytest.raises(EncodeError):
            encoder.encode(raster)

    def test_count_pdf_pages_file(self, encoder: PDFEncoder, make_raster, temp_dir):
        """测试按文件计页"""
        path = temp_dir / "out.pdf"
        path.write_bytes(encoder.encode(make_raster(100, 600)).payload)
        assert count_pdf_pages(path) == 2


class TestMarkdownEncoder:
    """Markdown编码器测试"""

    @pytest.fixture
    def encoder(self, composer) -> MarkdownEncoder:
        return MarkdownEncoder(composer)

    def test_section_markers(self, encoder: MarkdownEncoder):
        """测试选中/未选中标记与顺序"""
        sections = [
            Section(title="A", content="x", selected=True),
            Section(title="B", content="y", selected=False),
        ]
        artifact = encoder.encode("Base content", sections)
        text = artifact.payload.decode("utf-8")

        base = text.index("Base content")
        separator = text.index("---")
        a = text.index("☑ A")
        b = text.index("☐ B")
        assert base < separator < a < b
        assert text.index("x") > a
        assert text.index("y") > b
        assert artifact.type is ArtifactType.MD
        assert artifact.filename == "claude-confirm-2026-10-18-090507.md"

    def test_no_sections(self, encoder: MarkdownEncoder):
        """测试无段落时只输出原文"""
        assert encoder.render("# Title\n\nBody") == "# Title\n\nBody"

    def test_default_selected(self, encoder: MarkdownEncoder):
        """测试段落默认选中"""
        text = encoder.render("msg", [Section(title="T", content="c")])
        assert "### ☑ T" in text

    def test_utf8_payload(self, encoder: MarkdownEncoder):
        """测试UTF-8编码"""
        artifact = encoder.encode("已完成 ✅", [Section(title="修复", content="内容", selected=False)])
        assert "已完成 ✅" in artifact.payload.decode("utf-8")
        assert "### ☐ 修复" in artifact.payload.decode("utf-8")
