"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(composer, make_raster):
        raster = make_raster(1000, 4000)
        assert composer.compose("png").endswith(".png")
"""

from __future__ import annotations

import asyncio
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from confirm_export.config import RuntimeConfig
from confirm_export.interfaces import IExportSink, IRegionCapturer
from confirm_export.models import CapturedRaster, RenderOptions, VisualRegion
from confirm_export.naming import FilenameComposer

FIXED_NOW = datetime(2026, 10, 18, 9, 5, 7)


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（默认值）"""
    return RuntimeConfig()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """固定时钟 2026-10-18 09:05:07"""
    return lambda: FIXED_NOW


@pytest.fixture
def composer(fixed_clock: Callable[[], datetime]) -> FilenameComposer:
    """固定时钟的文件名组合器"""
    return FilenameComposer(clock=fixed_clock)


# ============================================================================
# 栅格 Fixtures
# ============================================================================

@pytest.fixture
def make_raster() -> Callable[..., CapturedRaster]:
    """栅格工厂：纯色PNG"""

    def _make(width: int, height: int, color: str = "#3366cc") -> CapturedRaster:
        return CapturedRaster.from_image(Image.new("RGB", (width, height), color))

    return _make


# ============================================================================
# 假协作方
# ============================================================================

class FakeCapturer(IRegionCapturer):
    """返回固定栅格的截图器"""

    def __init__(self, raster: CapturedRaster | None = None, error: Exception | None = None):
        self.raster = raster
        self.error = error
        self.calls: list[tuple[VisualRegion, RenderOptions]] = []

    async def capture(self, region: VisualRegion, options: RenderOptions) -> CapturedRaster:
        self.calls.append((region, options))
        await asyncio.sleep(0)
        if self.error:
            raise self.error
        return self.raster


class RecordingSink(IExportSink):
    """记录调用的落盘协作方"""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple[str, str, str]] = []

    async def save_export_file(self, filename: str, data: str, file_type: str) -> None:
        self.calls.append((filename, data, file_type))
        await asyncio.sleep(0)
        if self.error:
            raise self.error


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def capturer_factory() -> type[FakeCapturer]:
    return FakeCapturer


@pytest.fixture
def sink_factory() -> type[RecordingSink]:
    return RecordingSink


@pytest.fixture
def sample_region() -> VisualRegion:
    """不依赖浏览器的区域（配合 FakeCapturer 使用）"""
    return VisualRegion(page=object(), selector="#confirm-content")


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
