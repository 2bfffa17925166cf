"""
浏览器渲染器 - 显式构造、显式启停的无头Chromium

职责：
1. 启动/关闭 Playwright + Chromium（进程级生命周期，async with 管理）
2. 打开HTML字符串/本地文件/URL
3. 设备像素比与截图倍数一致，避免重采样

使用方式：
    async with BrowserRenderer() as renderer:
        page = await renderer.open_html(html)
        region = renderer.region(page, "#content")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from ..config import get_config
from ..interfaces import CaptureError
from ..models import VisualRegion

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Page, Playwright

    from ..config.runtime_config import BrowserConfig

logger = logging.getLogger(__name__)


class BrowserRenderer:
    """浏览器渲染器"""

    def __init__(self, browser_config: BrowserConfig | None = None, scale: float | None = None):
        config = get_config()
        self.browser_config = browser_config or config.browser
        self.scale = scale or config.capture.scale

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None

    @property
    def started(self) -> bool:
        return self._context is not None

    async def start(self) -> None:
        """启动浏览器（重复调用无副作用）"""
        if self.started:
            return

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.browser_config.headless,
                args=list(self.browser_config.launch_args),
            )
            self._context = await self._browser.new_context(
                viewport={
                    "width": self.browser_config.viewport_width,
                    "height": self.browser_config.viewport_height,
                },
                device_scale_factor=self.scale,
            )
        except PlaywrightError as e:
            await self.stop()
            raise CaptureError(f"浏览器启动失败: {e}") from e

        logger.info(f"浏览器渲染器已启动 (scale={self.scale})")

    async def stop(self) -> None:
        """关闭浏览器并释放 Playwright"""
        if self._context:
            await self._context.close()
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()

        self._context = None
        self._browser = None
        self._playwright = None

    async def __aenter__(self) -> BrowserRenderer:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def new_page(self) -> Page:
        if self._context is None:
            raise CaptureError("浏览器渲染器未启动")
        return await self._context.new_page()

    async def open_html(self, html: str) -> Page:
        """载入HTML字符串"""
        page = await self.new_page()
        try:
            await page.set_content(html, wait_until="load")
        except PlaywrightError as e:
            await page.close()
            raise CaptureError(f"HTML载入失败: {e}") from e
        return page

    async def open_file(self, html_path: Path) -> Page:
        """载入本地HTML文件（保留相对资源路径）"""
        if not html_path.exists():
            raise CaptureError(f"HTML文件不存在: {html_path}")
        return await self.open_url(html_path.resolve().as_uri())

    async def open_url(self, url: str) -> Page:
        """载入URL"""
        page = await self.new_page()
        try:
            await page.goto(url, wait_until="load")
        except PlaywrightError as e:
            await page.close()
            raise CaptureError(f"页面载入失败: {url}: {e}") from e
        return page

    @staticmethod
    def region(page: Page, selector: str) -> VisualRegion:
        return VisualRegion(page=page, selector=selector)
