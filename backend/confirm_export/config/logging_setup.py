"""
日志初始化 - 按 LoggingConfig 配置标准库 logging

仅由命令行入口调用；库代码只使用 logging.getLogger(__name__)。
"""

from __future__ import annotations

import logging
from pathlib import Path

from .runtime_config import RuntimeConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(config: RuntimeConfig, log_dir: Path | None = None) -> None:
    """配置根日志器（级别 + 可选文件输出）

    日志文件写入 log_dir，未指定时写入配置的导出目录。
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if config.logging.log_to_file:
        log_dir = Path(log_dir or config.export.export_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(log_dir / config.logging.log_file, encoding="utf-8")
        )

    logging.basicConfig(
        level=config.logging.log_level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
