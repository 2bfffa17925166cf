"""
导出协调器 - 编排 截图 -> (分页) -> 编码 -> 交付

职责：
1. 按产物类型顺序执行各阶段
2. 在 ExportJob 上记录状态流转与进度
3. 任一阶段失败立即标记失败并原样抛出（不重试、不静默降级）
4. 编码成功后恰好调用一次落盘协作方

每次调用的栅格/页序列/产物都是局部数据，并发调用之间无共享状态。

测试要点：
- test_export_png_handoff: PNG导出交付一次
- test_export_pdf_paginates: PDF导出经过分页状态
- test_capture_failure_no_handoff: 截图失败不交付
- test_persistence_failure: 落盘失败整体失败
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..capture import RegionCapturer
from ..config import get_config
from ..encoders import MarkdownEncoder, PDFEncoder, PNGEncoder
from ..interfaces import (
    IExportSink,
    IPaginator,
    IRegionCapturer,
    PersistenceError,
)
from ..models import (
    ArtifactType,
    ExportContext,
    ExportJob,
    RenderOptions,
    Section,
    VisualRegion,
)
from ..naming import FilenameComposer
from ..pagination import Paginator
from .stages import STAGES_BY_TYPE, PipelineStage, StageEnum

logger = logging.getLogger(__name__)


class ExportCoordinator:
    """导出协调器"""

    def __init__(
        self,
        sink: IExportSink,
        capturer: IRegionCapturer | None = None,
        paginator: IPaginator | None = None,
        composer: FilenameComposer | None = None,
    ):
        self.config = get_config()
        self.sink = sink
        self.capturer = capturer or RegionCapturer(self.config.capture)
        self.paginator = paginator or Paginator()

        composer = composer or FilenameComposer.from_config(self.config)
        self.png_encoder = PNGEncoder(composer)
        self.pdf_encoder = PDFEncoder(composer, paginator=self.paginator)
        self.md_encoder = MarkdownEncoder(composer)

    async def export_png(
        self,
        region: VisualRegion,
        options: RenderOptions | None = None,
        context: ExportContext | None = None,
    ) -> ExportJob:
        """导出为PNG"""
        return await self.export(ArtifactType.PNG, region=region, options=options, context=context)

    async def export_pdf(
        self,
        region: VisualRegion,
        options: RenderOptions | None = None,
        context: ExportContext | None = None,
    ) -> ExportJob:
        """导出为PDF"""
        return await self.export(ArtifactType.PDF, region=region, options=options, context=context)

    async def export_markdown(
        self,
        text: str,
        sections: Sequence[Section] = (),
        context: ExportContext | None = None,
    ) -> ExportJob:
        """导出为Markdown"""
        return await self.export(ArtifactType.MD, text=text, sections=sections, context=context)

    async def export(
        self,
        artifact_type: ArtifactType | str,
        *,
        region: VisualRegion | None = None,
        options: RenderOptions | None = None,
        text: str | None = None,
        sections: Sequence[Section] = (),
        context: ExportContext | None = None,
    ) -> ExportJob:
        """执行一次导出，返回完成的任务记录"""
        artifact_type = ArtifactType(artifact_type)
        if artifact_type is ArtifactType.MD:
            if text is None:
                raise ValueError("Markdown导出需要文本内容")
        elif region is None:
            raise ValueError(f"{artifact_type.value}导出需要可视区域")

        job = ExportJob(artifact_type=artifact_type)
        work: dict[str, Any] = {
            "region": region,
            "options": options or RenderOptions(),
            "text": text,
            "sections": list(sections),
            "context": context,
        }

        logger.info(f"[{job.job_id}] 开始导出: {artifact_type.value}")
        try:
            for stage in STAGES_BY_TYPE[artifact_type]:
                await self._execute_stage(job, stage, work)
            job.mark_succeeded()
        except Exception as e:
            logger.exception(f"导出失败: {job.job_id}")
            job.mark_failed(str(e))
            raise

        logger.info(f"[{job.job_id}] 导出完成: {job.filename}")
        return job

    async def _execute_stage(self, job: ExportJob, stage: PipelineStage, work: dict) -> None:
        """执行单个阶段"""
        job.transition(stage.state)
        job.percent = stage.progress_start
        logger.debug(f"[{job.job_id}] 开始阶段: {stage.name}")

        try:
            if stage.name == StageEnum.CAPTURE.value:
                work["raster"] = await self.capturer.capture(work["region"], work["options"])

            elif stage.name == StageEnum.PAGINATE.value:
                pages = self.paginator.paginate(
                    work["raster"],
                    self.pdf_encoder.page_width_mm,
                    self.pdf_encoder.page_height_mm,
                )
                work["pages"] = pages
                job.page_count = len(pages)

            elif stage.name == StageEnum.ENCODE.value:
                work["artifact"] = self._encode(job.artifact_type, work)
                job.filename = work["artifact"].filename
                job.payload_size = work["artifact"].size

            elif stage.name == StageEnum.HANDOFF.value:
                await self._handoff(work["artifact"])

        except Exception as e:
            logger.error(f"[{job.job_id}] 阶段失败 {stage.name}: {e}")
            raise

        job.percent = stage.progress_end

    def _encode(self, artifact_type: ArtifactType, work: dict):
        if artifact_type is ArtifactType.PNG:
            return self.png_encoder.encode(work["raster"], work["context"])
        if artifact_type is ArtifactType.PDF:
            return self.pdf_encoder.encode(work["raster"], work["context"], pages=work["pages"])
        return self.md_encoder.encode(work["text"], work["sections"], work["context"])

    async def _handoff(self, artifact) -> None:
        """交给落盘协作方（恰好一次）"""
        try:
            await self.sink.save_export_file(
                artifact.filename, artifact.to_base64(), artifact.type.value
            )
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"落盘失败: {artifact.filename}: {e}") from e
