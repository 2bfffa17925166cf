"""
产物模型 - 交给落盘协作方的最终对象
"""

from __future__ import annotations

import base64
from enum import Enum

from pydantic import BaseModel, Field


class ArtifactType(str, Enum):
    """产物类型"""
    PNG = "png"
    PDF = "pdf"
    MD = "md"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]


_MIME_TYPES = {
    ArtifactType.PNG: "image/png",
    ArtifactType.PDF: "application/pdf",
    ArtifactType.MD: "text/markdown",
}


class ExportArtifact(BaseModel):
    """导出产物（构造后不可变）"""
    filename: str
    type: ArtifactType
    payload: bytes = Field(..., repr=False)

    model_config = {"frozen": True}

    @property
    def size(self) -> int:
        return len(self.payload)

    def to_base64(self) -> str:
        """base64编码的内容（save_export_file 的 data 参数）"""
        return base64.b64encode(self.payload).decode("ascii")
