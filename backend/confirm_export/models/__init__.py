"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- VisualRegion/RenderOptions: 截图输入
- CapturedRaster: 截图产出
- Page/PageSequence: 分页结果
- ExportContext/Section/ConfirmRequest: 命名与文本输入
- ExportArtifact: 最终产物
- ExportJob: 单次导出的状态机记录
"""

from .artifact import ArtifactType, ExportArtifact
from .context import ConfirmRequest, ExportContext, Section
from .export_job import ExportJob, ExportState
from .page import Page, PageSequence
from .raster import CapturedRaster
from .region import RenderOptions, VisualRegion

__all__ = [
    "ArtifactType",
    "ExportArtifact",
    "ExportContext",
    "Section",
    "ConfirmRequest",
    "ExportJob",
    "ExportState",
    "Page",
    "PageSequence",
    "CapturedRaster",
    "RenderOptions",
    "VisualRegion",
]
