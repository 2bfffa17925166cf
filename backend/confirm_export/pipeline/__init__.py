"""
流水线模块 - 导出编排与交付

子模块：
- stages: 流水线各阶段定义
- coordinator: 导出协调器
- sinks: 落盘协作方实现
- request_loader: 确认请求读取
"""

from .coordinator import ExportCoordinator
from .request_loader import load_confirm_request
from .sinks import FileExportSink
from .stages import STAGES_BY_TYPE, PipelineStage, StageEnum

__all__ = [
    "ExportCoordinator",
    "FileExportSink",
    "load_confirm_request",
    "PipelineStage",
    "StageEnum",
    "STAGES_BY_TYPE",
]
