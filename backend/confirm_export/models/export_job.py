"""
导出任务模型 - 单次导出调用的状态机记录

状态流转：
    idle -> capturing -> (paginating) -> encoding -> handoff -> idle
    任意非idle状态 -> failed
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from .artifact import ArtifactType


class ExportState(str, Enum):
    """导出状态枚举"""
    IDLE = "idle"
    CAPTURING = "capturing"
    PAGINATING = "paginating"
    ENCODING = "encoding"
    HANDOFF = "handoff"
    FAILED = "failed"


_TRANSITIONS: dict[ExportState, set[ExportState]] = {
    ExportState.IDLE: {ExportState.CAPTURING, ExportState.ENCODING},
    ExportState.CAPTURING: {ExportState.PAGINATING, ExportState.ENCODING, ExportState.FAILED},
    ExportState.PAGINATING: {ExportState.ENCODING, ExportState.FAILED},
    ExportState.ENCODING: {ExportState.HANDOFF, ExportState.FAILED},
    ExportState.HANDOFF: {ExportState.IDLE, ExportState.FAILED},
    ExportState.FAILED: set(),
}


class ExportJob(BaseModel):
    """导出任务"""
    job_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    artifact_type: ArtifactType

    # 状态
    state: ExportState = ExportState.IDLE
    history: list[ExportState] = Field(default_factory=lambda: [ExportState.IDLE])
    percent: int = 0

    # 结果
    filename: str | None = None
    payload_size: int | None = None
    page_count: int | None = None
    errors: list[str] = Field(default_factory=list, description="错误信息")

    # 时间戳
    created_at: datetime = Field(default_factory=datetime.now)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    def transition(self, state: ExportState) -> None:
        """切换状态（非法流转抛 ValueError）"""
        if state not in _TRANSITIONS[self.state]:
            raise ValueError(f"非法状态流转: {self.state.value} -> {state.value}")
        if self.started_at is None:
            self.started_at = datetime.now()
        self.state = state
        self.history.append(state)

    def mark_succeeded(self) -> None:
        """交付完成，回到idle"""
        self.transition(ExportState.IDLE)
        self.finished_at = datetime.now()
        self.percent = 100

    def mark_failed(self, error: str) -> None:
        """标记为失败"""
        if self.state is not ExportState.FAILED:
            self.state = ExportState.FAILED
            self.history.append(ExportState.FAILED)
        self.finished_at = datetime.now()
        self.errors.append(error)

    @property
    def succeeded(self) -> bool:
        return (
            self.state is ExportState.IDLE
            and self.finished_at is not None
            and not self.errors
        )
