"""
命名模块 - 文件名净化与组合

子模块：
- sanitizer: 文件系统安全名称
- composer: 产物文件名组合
"""

from .composer import FilenameComposer
from .sanitizer import NameSanitizer

__all__ = [
    "NameSanitizer",
    "FilenameComposer",
]
