"""
落盘协作方 - save_export_file 的文件系统实现

职责：
1. 校验文件名与类型一致
2. base64解码后写入导出目录
3. 所有失败统一为 PersistenceError

测试要点：
- test_save_writes_decoded_bytes: 写入解码后的字节
- test_type_mismatch: 扩展名与类型不一致
- test_invalid_base64: 非法base64
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from pathlib import Path

from ..config import get_config
from ..interfaces import IExportSink, PersistenceError
from ..models import ArtifactType

logger = logging.getLogger(__name__)


class FileExportSink(IExportSink):
    """导出目录落盘"""

    def __init__(self, export_dir: Path | None = None):
        self.export_dir = Path(export_dir or get_config().export.export_dir)

    def target_path(self, filename: str) -> Path:
        return self.export_dir / filename

    async def save_export_file(self, filename: str, data: str, file_type: str) -> None:
        try:
            artifact_type = ArtifactType(file_type)
        except ValueError as e:
            raise PersistenceError(f"不支持的文件类型: {file_type}") from e

        if Path(filename).name != filename:
            raise PersistenceError(f"文件名不能包含路径: {filename}")
        if Path(filename).suffix != f".{artifact_type.extension}":
            raise PersistenceError(f"文件名与类型不一致: {filename} / {file_type}")

        try:
            payload = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise PersistenceError(f"base64解码失败: {filename}") from e

        path = self.target_path(filename)
        try:
            await asyncio.to_thread(self._write, path, payload)
        except OSError as e:
            raise PersistenceError(f"写入失败: {path}: {e}") from e

        logger.info(f"导出文件已保存: {path} ({len(payload)} bytes)")

    @staticmethod
    def _write(path: Path, payload: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
