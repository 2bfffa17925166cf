"""
集成测试 fixtures（真实 Chromium）

浏览器无法启动时（未执行 playwright install）跳过。
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from confirm_export.capture import BrowserRenderer
from confirm_export.config.runtime_config import BrowserConfig
from confirm_export.interfaces import CaptureError


@pytest_asyncio.fixture
async def renderer() -> AsyncIterator[BrowserRenderer]:
    """2 倍设备像素比的无头浏览器"""
    browser = BrowserRenderer(BrowserConfig(), scale=2.0)
    try:
        await browser.start()
    except CaptureError as e:
        pytest.skip(f"Chromium 不可用: {e}")
    try:
        yield browser
    finally:
        await browser.stop()
