"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 模块间通过接口通信，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换（截图/落盘均可替换为假实现）

使用方式：
    from confirm_export.interfaces import IExportSink

    class MySink(IExportSink):
        async def save_export_file(self, filename: str, data: str, file_type: str) -> None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import (
        CapturedRaster,
        ExportArtifact,
        ExportContext,
        PageSequence,
        RenderOptions,
        Section,
        VisualRegion,
    )


# ============================================================================
# 截图与分页接口
# ============================================================================

class IRegionCapturer(ABC):
    """区域截图器接口 - 将可视区域完整栅格化"""

    @abstractmethod
    async def capture(self, region: VisualRegion, options: RenderOptions) -> CapturedRaster:
        """
        截取区域的完整内容（不受滚动/裁切影响）

        Args:
            region: 页面上的可视区域
            options: 渲染选项（明暗主题）

        Returns:
            2倍采样的栅格图

        Raises:
            CaptureError: 渲染失败或尺寸为零
        """
        ...


class IPaginator(ABC):
    """分页器接口 - 计算长图的分页偏移"""

    @abstractmethod
    def paginate(
        self,
        raster: CapturedRaster,
        page_width_mm: float = 210,
        page_height_mm: float = 297,
    ) -> PageSequence:
        """
        计算分页序列

        Args:
            raster: 栅格图
            page_width_mm: 页宽（毫米）
            page_height_mm: 页高（毫米）

        Returns:
            有序页序列

        Raises:
            EncodeError: 栅格尺寸非法
        """
        ...


# ============================================================================
# 产物编码接口
# ============================================================================

class IRasterEncoder(ABC):
    """栅格编码器接口（PNG/PDF）"""

    @abstractmethod
    def encode(self, raster: CapturedRaster, context: ExportContext | None = None) -> ExportArtifact:
        """将栅格图编码为导出产物"""
        ...


class ITextEncoder(ABC):
    """文本编码器接口（Markdown）"""

    @abstractmethod
    def encode(
        self,
        text: str,
        sections: Sequence[Section] = (),
        context: ExportContext | None = None,
    ) -> ExportArtifact:
        """将文本与段落摘要编码为导出产物"""
        ...


# ============================================================================
# 外部协作方接口
# ============================================================================

class IExportSink(ABC):
    """落盘协作方接口 - 对应 save_export_file"""

    @abstractmethod
    async def save_export_file(self, filename: str, data: str, file_type: str) -> None:
        """
        保存导出文件

        Args:
            filename: 文件名
            data: base64编码的内容
            file_type: png/pdf/md

        Raises:
            PersistenceError: 保存失败
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class ConfirmExportError(Exception):
    """基础异常"""
    pass


class CaptureError(ConfirmExportError):
    """截图错误（渲染异常/跨域限制/零尺寸）"""
    pass


class EncodeError(ConfirmExportError):
    """编码错误（栅格尺寸非法等）"""
    pass


class PersistenceError(ConfirmExportError):
    """落盘错误"""
    pass


class RequestError(ConfirmExportError):
    """确认请求读取错误"""
    pass
