"""
运行期配置 - 读取 config/confirm_export.yaml

职责：
- 加载截图/分页/命名/浏览器/落盘等运行参数
- 提供环境变量覆盖机制（CONFIRM_EXPORT_ 前缀）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from ..models.region import DARK_BACKGROUND, LIGHT_BACKGROUND

DEFAULT_CONFIG_PATH = Path("config/confirm_export.yaml")


class CaptureConfig(BaseModel):
    """截图配置"""

    scale: float = 2.0
    padding: str = "1rem"
    dark_background: str = DARK_BACKGROUND
    light_background: str = LIGHT_BACKGROUND
    timeout_ms: int = 30000


class PageConfig(BaseModel):
    """分页配置（A4 竖版，毫米）"""

    width_mm: float = 210.0
    height_mm: float = 297.0


class NamingConfig(BaseModel):
    """文件名配置"""

    prefix: str = "claude-confirm-"
    max_token_length: int = 50


class BrowserConfig(BaseModel):
    """浏览器渲染器配置"""

    headless: bool = True
    viewport_width: int = 1280
    viewport_height: int = 800
    launch_args: list[str] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-dev-shm-usage"]
    )


class ExportConfig(BaseModel):
    """落盘配置"""

    export_dir: Path = Path("exports")


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: str = "confirm_export.log"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    page: PageConfig = Field(default_factory=PageConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "CONFIRM_EXPORT_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        config = cls(
            capture=CaptureConfig(**cls._extract(runtime_opts, "capture")),
            page=PageConfig(**cls._extract(runtime_opts, "page")),
            naming=NamingConfig(**cls._extract(runtime_opts, "naming")),
            browser=BrowserConfig(**cls._extract(runtime_opts, "browser")),
            export=ExportConfig(**cls._extract(runtime_opts, "export")),
            logging=LoggingConfig(**cls._extract(runtime_opts, "logging")),
        )

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        export_dir = Path(self.export.export_dir)
        if not export_dir.is_absolute():
            self.export.export_dir = (base_dir / export_dir).resolve()

    def ensure_dirs(self) -> None:
        """确保导出目录存在"""
        Path(self.export.export_dir).mkdir(parents=True, exist_ok=True)


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_CONFIG_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
