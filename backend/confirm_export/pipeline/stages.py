"""
流水线阶段定义

职责：
1. 定义各阶段的名称、对应状态与进度区间
2. 按产物类型给出阶段列表（PNG/PDF/Markdown）

测试要点：
- test_stage_tables: 各产物类型的阶段顺序
- test_progress_bounds: 进度区间首尾衔接
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..models import ArtifactType, ExportState


class StageEnum(str, Enum):
    """流水线阶段枚举"""
    CAPTURE = "CAPTURE"
    PAGINATE = "PAGINATE"
    ENCODE = "ENCODE"
    HANDOFF = "HANDOFF"


@dataclass(frozen=True)
class PipelineStage:
    """流水线阶段"""
    name: str
    state: ExportState
    progress_start: int  # 进度起点（0-100）
    progress_end: int    # 进度终点


PNG_STAGES: list[PipelineStage] = [
    PipelineStage(StageEnum.CAPTURE.value, ExportState.CAPTURING, 0, 60),
    PipelineStage(StageEnum.ENCODE.value, ExportState.ENCODING, 60, 80),
    PipelineStage(StageEnum.HANDOFF.value, ExportState.HANDOFF, 80, 100),
]

PDF_STAGES: list[PipelineStage] = [
    PipelineStage(StageEnum.CAPTURE.value, ExportState.CAPTURING, 0, 50),
    PipelineStage(StageEnum.PAGINATE.value, ExportState.PAGINATING, 50, 55),
    PipelineStage(StageEnum.ENCODE.value, ExportState.ENCODING, 55, 85),
    PipelineStage(StageEnum.HANDOFF.value, ExportState.HANDOFF, 85, 100),
]

MD_STAGES: list[PipelineStage] = [
    PipelineStage(StageEnum.ENCODE.value, ExportState.ENCODING, 0, 60),
    PipelineStage(StageEnum.HANDOFF.value, ExportState.HANDOFF, 60, 100),
]

STAGES_BY_TYPE: dict[ArtifactType, list[PipelineStage]] = {
    ArtifactType.PNG: PNG_STAGES,
    ArtifactType.PDF: PDF_STAGES,
    ArtifactType.MD: MD_STAGES,
}
