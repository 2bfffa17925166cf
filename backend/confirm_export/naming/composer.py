"""
文件名组合器 - 项目标识 + 时间戳 + 扩展名

格式：claude-confirm-{token-}{YYYY-MM-DD}-{HHMMSS}.{ext}

项目标识解析顺序：
1. context.project_name
2. context.working_directory 的最后一段（按 / 或 \\ 切分）
3. 无标识（省略 token 段）

同一秒内相同上下文的两次导出会得到相同文件名（后写覆盖）。
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from ..models import ExportContext
from ..models.context import project_name_from
from .sanitizer import NameSanitizer

if TYPE_CHECKING:
    from ..config import RuntimeConfig

DEFAULT_PREFIX = "claude-confirm-"


class FilenameComposer:
    """文件名组合器"""

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        sanitizer: NameSanitizer | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.prefix = prefix
        self.sanitizer = sanitizer or NameSanitizer()
        self.clock = clock

    @classmethod
    def from_config(cls, config: RuntimeConfig) -> FilenameComposer:
        """按运行期配置构造"""
        return cls(
            prefix=config.naming.prefix,
            sanitizer=NameSanitizer(max_length=config.naming.max_token_length),
        )

    def compose(self, extension: str, context: ExportContext | None = None) -> str:
        """生成产物文件名"""
        now = self.clock()
        date = now.strftime("%Y-%m-%d")
        time = now.strftime("%H%M%S")

        token = self.sanitizer.sanitize(self.resolve_token(context))
        token_part = f"{token}-" if token else ""

        return f"{self.prefix}{token_part}{date}-{time}.{extension}"

    @staticmethod
    def resolve_token(context: ExportContext | None) -> str | None:
        """解析项目标识（未净化）"""
        if context is None:
            return None
        return context.project_name or project_name_from(context.working_directory)
