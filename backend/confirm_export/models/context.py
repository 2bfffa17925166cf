"""
上下文模型 - 导出上下文/段落/确认请求

ExportContext 仅用于文件名派生，不参与内容。
请求中的 env_context 可用 cwd 或 working_directory 表示工作目录。
"""

from __future__ import annotations

import os
import re

from pydantic import AliasChoices, BaseModel, Field

_PATH_SEP_RE = re.compile(r"[/\\]")


def project_name_from(working_directory: str | None) -> str | None:
    """取工作目录最后一段（忽略末尾分隔符）"""
    if not working_directory:
        return None
    segments = [s for s in _PATH_SEP_RE.split(working_directory) if s]
    return segments[-1] if segments else None


class ExportContext(BaseModel):
    """环境上下文"""
    project_name: str | None = Field(None, description="项目名称")
    working_directory: str | None = Field(
        None,
        validation_alias=AliasChoices("working_directory", "cwd"),
        description="当前工作目录",
    )
    terminal: str | None = Field(None, description="终端程序(TERM_PROGRAM)")
    pid: int | None = Field(None, description="进程ID")

    model_config = {"frozen": True, "populate_by_name": True}

    @classmethod
    def detect(cls) -> ExportContext:
        """从当前环境自动探测"""
        try:
            cwd = os.getcwd()
        except OSError:
            cwd = None

        return cls(
            project_name=project_name_from(cwd),
            working_directory=cwd,
            terminal=os.environ.get("TERM_PROGRAM"),
            pid=os.getpid(),
        )

    def merge_with(self, other: ExportContext | None) -> ExportContext:
        """合并上下文，逐字段优先使用 other 的值

        other 只给出工作目录时，项目名随之取该目录最后一段。
        """
        if other is None:
            return self

        project_name = other.project_name
        if not project_name and other.working_directory:
            project_name = project_name_from(other.working_directory)

        return ExportContext(
            project_name=project_name or self.project_name,
            working_directory=other.working_directory or self.working_directory,
            terminal=other.terminal or self.terminal,
            pid=other.pid if other.pid is not None else self.pid,
        )


class Section(BaseModel):
    """段落定义"""
    title: str
    content: str
    selected: bool = True


class ConfirmRequest(BaseModel):
    """确认请求（消息 + 可选段落）"""
    message: str
    sections: list[Section] = Field(default_factory=list)
    is_markdown: bool = True
    env_context: ExportContext | None = None
