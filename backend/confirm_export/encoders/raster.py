"""
PNG编码器 - 栅格图直接输出

截图阶段已产出PNG，这里不做重编码，产物字节与截图完全一致。
"""

from __future__ import annotations

from ..config import get_config
from ..interfaces import EncodeError, IRasterEncoder
from ..models import ArtifactType, CapturedRaster, ExportArtifact, ExportContext
from ..naming import FilenameComposer

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class PNGEncoder(IRasterEncoder):
    """PNG编码器实现"""

    def __init__(self, composer: FilenameComposer | None = None):
        self.composer = composer or FilenameComposer.from_config(get_config())

    def encode(self, raster: CapturedRaster, context: ExportContext | None = None) -> ExportArtifact:
        if raster.pixel_width <= 0 or raster.pixel_height <= 0:
            raise EncodeError(f"栅格尺寸非法: {raster.pixel_width}x{raster.pixel_height}px")
        if not raster.png_bytes.startswith(PNG_SIGNATURE):
            raise EncodeError("栅格数据不是PNG编码")

        return ExportArtifact(
            filename=self.composer.compose(ArtifactType.PNG.extension, context),
            type=ArtifactType.PNG,
            payload=raster.png_bytes,
        )
