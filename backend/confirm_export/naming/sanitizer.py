"""
名称净化器 - 生成文件系统安全的标识

规则（按顺序）：
1. 保留字符 < > : " / \\ | ? * 替换为 -
2. 连续空白折叠为单个 -
3. 连续 - 折叠为单个 -
4. 去除首尾 -
5. 截断到最大长度（截断后再次去除尾部 -）

测试要点：
- test_reserved_chars: 保留字符替换
- test_collapse: 空白/连字符折叠
- test_truncate: 截断不留尾部连字符
"""

from __future__ import annotations

import re

RESERVED_CHARS = '<>:"/\\|?*'

_RESERVED_RE = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-{2,}")


class NameSanitizer:
    """名称净化器（纯函数，无副作用）"""

    def __init__(self, max_length: int = 50):
        self.max_length = max_length

    def sanitize(self, raw: str | None) -> str | None:
        """净化名称，空输入或净化后为空返回 None"""
        if not raw:
            return None

        name = _RESERVED_RE.sub("-", raw)
        name = _WHITESPACE_RE.sub("-", name)
        name = _HYPHENS_RE.sub("-", name)
        name = name.strip("-")
        name = name[: self.max_length].rstrip("-")

        return name or None
