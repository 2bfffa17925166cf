"""
确认请求读取 - 从JSON文件加载消息与段落
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from ..interfaces import RequestError
from ..models import ConfirmRequest


def load_confirm_request(file_path: str | Path) -> ConfirmRequest:
    """读取确认请求文件"""
    path = Path(file_path)
    if not path.exists():
        raise RequestError(f"文件不存在: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RequestError(f"读取文件失败: {e}") from e

    if not content.strip():
        raise RequestError("文件内容为空")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise RequestError(f"解析 JSON 失败: {e}") from e

    try:
        return ConfirmRequest.model_validate(data)
    except ValidationError as e:
        raise RequestError(f"请求格式错误: {e}") from e
