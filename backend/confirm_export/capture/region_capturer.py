"""
区域截图器 - 将可视区域完整栅格化

职责：
1. 克隆区域到原节点之后的绝对定位宿主（同一父节点，祖先样式照常生效）
2. 解除克隆及其后代的 overflow/max-height/固定高度（替换元素除外），按完整滚动尺寸排版；裁剪祖先临时放开
3. 按主题填充背景、加 1rem 内边距
4. 以 2 倍逻辑尺寸截图；设备像素比不一致时用 Pillow 重采样
5. 任何退出路径（含失败）都移除克隆，恢复祖先样式与滚动位置

依赖：
- playwright: 元素截图
- Pillow: 尺寸校验与重采样

测试要点：
- test_capture_full_extent: 栅格尺寸来自克隆的完整尺寸
- test_clone_discarded_on_failure: 失败时克隆仍被移除
- test_zero_size_region: 零尺寸抛 CaptureError
- test_missing_region: 选择器无匹配抛 CaptureError
"""

from __future__ import annotations

import io
import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from PIL import Image
from playwright.async_api import Error as PlaywrightError

from ..config import get_config
from ..interfaces import CaptureError, IRegionCapturer
from ..models import CapturedRaster, RenderOptions, VisualRegion

if TYPE_CHECKING:
    from ..config.runtime_config import CaptureConfig

logger = logging.getLogger(__name__)

HOST_ATTR = "data-confirm-export-host"
CLONE_ATTR = "data-confirm-export-clone"
RESTORE_KEY = "__confirmExportRestore"

# 参数: [selector, cloneId, background, padding]
# 返回: 克隆的逻辑尺寸与设备像素比；选择器无匹配时返回 null
# 宿主插在原节点之后（同一父节点），祖先作用域的样式与继承属性保持不变
MOUNT_CLONE_JS = """
([selector, cloneId, background, padding]) => {
    const source = document.querySelector(selector);
    if (!source || !source.parentNode) {
        return null;
    }

    const fullWidth = Math.max(source.scrollWidth, source.getBoundingClientRect().width);
    const restore = {
        scrollX: window.scrollX,
        scrollY: window.scrollY,
        ancestors: [],
    };

    const clipping = ['hidden', 'auto', 'scroll', 'clip'];
    const clips = (style) => clipping.includes(style.overflowX) || clipping.includes(style.overflowY);

    // 祖先的裁剪会截断绝对定位的宿主，截图期间临时放开
    for (let node = source.parentElement; node && node !== document.documentElement; node = node.parentElement) {
        if (clips(getComputedStyle(node))) {
            restore.ancestors.push({
                node,
                overflow: node.style.overflow,
                scrollTop: node.scrollTop,
                scrollLeft: node.scrollLeft,
            });
        }
    }

    const host = document.createElement('div');
    host.setAttribute('%(host)s', cloneId);
    host.setAttribute('aria-hidden', 'true');
    host.style.cssText = 'position:absolute;left:0;top:0;margin:0;padding:0;border:0;z-index:2147483647;';

    const clone = source.cloneNode(true);
    clone.setAttribute('%(clone)s', cloneId);
    host.appendChild(clone);
    source.parentNode.insertBefore(host, source.nextSibling);

    window.%(restore)s = window.%(restore)s || {};
    window.%(restore)s[cloneId] = restore;
    for (const entry of restore.ancestors) {
        entry.node.style.overflow = 'visible';
    }

    // 替换元素保留自身尺寸
    const replaced = ['IMG', 'SVG', 'CANVAS', 'VIDEO', 'IFRAME', 'OBJECT', 'EMBED', 'INPUT', 'TEXTAREA', 'SELECT'];
    for (const node of [clone, ...clone.querySelectorAll('*')]) {
        if (node !== clone && replaced.includes(node.tagName.toUpperCase())) {
            continue;
        }
        node.style.overflow = 'visible';
        node.style.maxHeight = 'none';
        node.style.height = 'auto';
    }

    clone.style.boxSizing = 'content-box';
    clone.style.width = fullWidth + 'px';
    clone.style.margin = '0';
    clone.style.padding = padding;
    clone.style.backgroundColor = background;

    const rect = clone.getBoundingClientRect();
    return {
        width: rect.width,
        height: rect.height,
        devicePixelRatio: window.devicePixelRatio,
    };
}
""" % {"host": HOST_ATTR, "clone": CLONE_ATTR, "restore": RESTORE_KEY}

DISCARD_CLONE_JS = """
(cloneId) => {
    const registry = window.%(restore)s || {};
    const restore = registry[cloneId];
    delete registry[cloneId];

    const host = document.querySelector(`[%(host)s="${cloneId}"]`);
    if (host) {
        host.remove();
    }
    if (!restore) {
        return Boolean(host);
    }
    for (const entry of restore.ancestors) {
        entry.node.style.overflow = entry.overflow;
        entry.node.scrollTop = entry.scrollTop;
        entry.node.scrollLeft = entry.scrollLeft;
    }
    window.scrollTo(restore.scrollX, restore.scrollY);
    return true;
}
""" % {"host": HOST_ATTR, "restore": RESTORE_KEY}


class RegionCapturer(IRegionCapturer):
    """区域截图器实现"""

    def __init__(self, capture_config: CaptureConfig | None = None):
        self.config = capture_config or get_config().capture
        self.scale = self.config.scale

    async def capture(self, region: VisualRegion, options: RenderOptions) -> CapturedRaster:
        """截取区域完整内容"""
        page = region.page
        clone_id = uuid.uuid4().hex
        background = (
            self.config.dark_background if options.is_dark_theme else self.config.light_background
        )

        try:
            async with self._detached_clone(page, region.selector, clone_id, background) as metrics:
                png_bytes = await page.locator(f'[{CLONE_ATTR}="{clone_id}"]').screenshot(
                    type="png",
                    animations="disabled",
                    timeout=self.config.timeout_ms,
                )
        except PlaywrightError as e:
            raise CaptureError(f"区域渲染失败: {region.describe()}: {e}") from e

        raster = self._to_raster(png_bytes, metrics)
        logger.info(
            f"截图完成: {region.describe()} -> {raster.pixel_width}x{raster.pixel_height}px"
        )
        return raster

    @asynccontextmanager
    async def _detached_clone(
        self, page: Any, selector: str, clone_id: str, background: str
    ) -> AsyncIterator[dict[str, float]]:
        """挂载归一化后的克隆，退出时移除"""
        try:
            metrics = await page.evaluate(
                MOUNT_CLONE_JS, [selector, clone_id, background, self.config.padding]
            )
            if metrics is None:
                raise CaptureError(f"区域不存在: {selector}")
            if metrics["width"] <= 0 or metrics["height"] <= 0:
                raise CaptureError(
                    f"区域尺寸为零: {selector} ({metrics['width']}x{metrics['height']})"
                )
            yield metrics
        finally:
            await self._discard_clone(page, clone_id)

    async def _discard_clone(self, page: Any, clone_id: str) -> None:
        try:
            await page.evaluate(DISCARD_CLONE_JS, clone_id)
        except PlaywrightError as e:
            # 页面已关闭时克隆随页面销毁
            logger.warning(f"克隆移除失败: {clone_id}: {e}")

    def _to_raster(self, png_bytes: bytes, metrics: dict[str, float]) -> CapturedRaster:
        """校验尺寸，必要时重采样到 scale 倍逻辑尺寸"""
        try:
            image = Image.open(io.BytesIO(png_bytes))
            image.load()
        except OSError as e:
            raise CaptureError(f"截图数据无法解码: {e}") from e

        if image.width == 0 or image.height == 0:
            raise CaptureError("截图结果尺寸为零")

        if metrics.get("devicePixelRatio") == self.scale:
            return CapturedRaster(
                pixel_width=image.width,
                pixel_height=image.height,
                png_bytes=png_bytes,
                scale=self.scale,
            )

        target = (
            max(1, round(metrics["width"] * self.scale)),
            max(1, round(metrics["height"] * self.scale)),
        )
        logger.debug(
            f"设备像素比 {metrics.get('devicePixelRatio')} != {self.scale}，重采样到 {target}"
        )
        return CapturedRaster.from_image(
            image.resize(target, Image.Resampling.LANCZOS), scale=self.scale
        )
