"""
导出协调器单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_coordinator.py -v
"""

import asyncio
import base64

import pytest

from confirm_export.interfaces import CaptureError, EncodeError, PersistenceError
from confirm_export.models import (
    ArtifactType,
    CapturedRaster,
    ExportContext,
    ExportState,
    RenderOptions,
    Section,
)
from confirm_export.pipeline import ExportCoordinator

pytestmark = pytest.mark.asyncio


def _coordinator(sink, capturer, composer) -> ExportCoordinator:
    return ExportCoordinator(sink, capturer=capturer, composer=composer)


class TestExportCoordinator:
    """导出协调器测试"""

    async def test_export_png_handoff(
        self, recording_sink, capturer_factory, composer, make_raster, sample_region
    ):
        """测试PNG导出交付一次且内容一致"""
        raster = make_raster(60, 40)
        capturer = capturer_factory(raster)
        coordinator = _coordinator(recording_sink, capturer, composer)

        job = await coordinator.export_png(
            sample_region, RenderOptions(is_dark_theme=True), ExportContext(project_name="demo")
        )

        assert job.succeeded
        assert job.filename == "claude-confirm-demo-2026-10-18-090507.png"
        assert job.history == [
            ExportState.IDLE,
            ExportState.CAPTURING,
            ExportState.ENCODING,
            ExportState.HANDOFF,
            ExportState.IDLE,
        ]
        assert len(recording_sink.calls) == 1
        filename, data, file_type = recording_sink.calls[0]
        assert filename == job.filename
        assert file_type == "png"
        assert base64.b64decode(data) == raster.png_bytes
        assert capturer.calls[0][1].is_dark_theme is True

    async def test_export_pdf_paginates(
        self, recording_sink, capturer_factory, composer, make_raster, sample_region
    ):
        """测试PDF导出经过分页状态"""
        coordinator = _coordinator(recording_sink, capturer_factory(make_raster(1000, 4000)), composer)

        job = await coordinator.export_pdf(sample_region)

        assert job.page_count == 3
        assert ExportState.PAGINATING in job.history
        assert job.percent == 100
        _, data, file_type = recording_sink.calls[0]
        assert file_type == "pdf"
        assert base64.b64decode(data).startswith(b"%PDF")

    async def test_export_markdown(self, recording_sink, capturer_factory, composer):
        """测试Markdown导出不经过截图"""
        capturer = capturer_factory()
        coordinator = _coordinator(recording_sink, capturer, composer)

        job = await coordinator.export_markdown(
            "done", [Section(title="Next", content="step", selected=False)]
        )

        assert capturer.calls == []
        assert job.history == [
            ExportState.IDLE,
            ExportState.ENCODING,
            ExportState.HANDOFF,
            ExportState.IDLE,
        ]
        _, data, file_type = recording_sink.calls[0]
        assert file_type == "md"
        assert "### ☐ Next" in base64.b64decode(data).decode("utf-8")

    async def test_dispatch_by_string(self, recording_sink, capturer_factory, composer):
        """测试按字符串类型分发"""
        coordinator = _coordinator(recording_sink, capturer_factory(), composer)
        job = await coordinator.export("md", text="hello")
        assert job.artifact_type is ArtifactType.MD

    async def test_missing_inputs(self, recording_sink, capturer_factory, composer):
        """测试缺少输入"""
        coordinator = _coordinator(recording_sink, capturer_factory(), composer)
        with pytest.raises(ValueError):
            await coordinator.export(ArtifactType.PNG)
        with pytest.raises(ValueError):
            await coordinator.export(ArtifactType.MD)
        assert recording_sink.calls == []

    async def test_capture_failure_no_handoff(
        self, recording_sink, capturer_factory, composer, sample_region
    ):
        """测试截图失败不交付，原错误抛出"""
        capturer = capturer_factory(error=CaptureError("cross-origin"))
        coordinator = _coordinator(recording_sink, capturer, composer)

        with pytest.raises(CaptureError, match="cross-origin"):
            await coordinator.export_pdf(sample_region)
        assert recording_sink.calls == []

    async def test_encode_failure(self, recording_sink, capturer_factory, composer, sample_region):
        """测试零宽栅格在分页阶段失败"""
        raster = CapturedRaster(pixel_width=0, pixel_height=100, png_bytes=b"")
        coordinator = _coordinator(recording_sink, capturer_factory(raster), composer)

        with pytest.raises(EncodeError):
            await coordinator.export_pdf(sample_region)
        assert recording_sink.calls == []

    async def test_persistence_failure(
        self, sink_factory, capturer_factory, composer, make_raster, sample_region
    ):
        """测试落盘失败整体失败（外部异常包装为 PersistenceError）"""
        sink = sink_factory(error=OSError("disk full"))
        coordinator = _coordinator(sink, capturer_factory(make_raster(10, 10)), composer)

        with pytest.raises(PersistenceError) as exc_info:
            await coordinator.export_png(sample_region)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert len(sink.calls) == 1

    async def test_concurrent_exports(
        self, recording_sink, capturer_factory, composer, make_raster, sample_region
    ):
        """测试并发导出互不干扰"""
        coordinator = _coordinator(recording_sink, capturer_factory(make_raster(100, 100)), composer)

        png_job, pdf_job, md_job = await asyncio.gather(
            coordinator.export_png(sample_region),
            coordinator.export_pdf(sample_region),
            coordinator.export_markdown("text"),
        )

        assert len({png_job.job_id, pdf_job.job_id, md_job.job_id}) == 3
        assert all(job.succeeded for job in (png_job, pdf_job, md_job))
        assert sorted(call[2] for call in recording_sink.calls) == ["md", "pdf", "png"]
