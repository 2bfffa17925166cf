"""
命令行入口 - 导出HTML区域为PNG/PDF，或导出确认请求为Markdown

使用方式：
    confirm-export png --html page.html --selector "#content" --dark
    confirm-export pdf --url https://example.com --selector main --project demo
    confirm-export md --request request.json --out-dir exports
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .capture import BrowserRenderer
from .config import RuntimeConfig, configure_logging, get_config, reload_config
from .encoders import count_pdf_pages
from .interfaces import ConfirmExportError, RequestError
from .models import ArtifactType, ExportContext, RenderOptions
from .naming import FilenameComposer
from .pipeline import ExportCoordinator, FileExportSink, load_confirm_request

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="confirm-export",
        description="Export a rendered HTML region as PNG/PDF, or a confirm request as Markdown.",
    )
    parser.add_argument("--config", default="", help="运行期配置YAML路径")
    parser.add_argument("--out-dir", default="", help="导出目录（默认取配置）")
    parser.add_argument("--project", default="", help="项目名称（用于文件名）")
    parser.add_argument("--cwd", default="", help="工作目录（无项目名时取最后一段）")

    sub = parser.add_subparsers(dest="command", required=True)

    for name in (ArtifactType.PNG.value, ArtifactType.PDF.value):
        capture = sub.add_parser(name, help=f"截图导出为{name.upper()}")
        source = capture.add_mutually_exclusive_group(required=True)
        source.add_argument("--html", help="本地HTML文件")
        source.add_argument("--url", help="页面URL")
        capture.add_argument("--selector", default="body", help="区域CSS选择器（默认 body）")
        capture.add_argument("--dark", action="store_true", help="暗色背景")

    md = sub.add_parser(ArtifactType.MD.value, help="导出为Markdown")
    text_source = md.add_mutually_exclusive_group(required=True)
    text_source.add_argument("--request", help="确认请求JSON（message + sections）")
    text_source.add_argument("--text", help="纯文本/Markdown文件")

    return parser


def resolve_context(args: argparse.Namespace, extra: ExportContext | None = None) -> ExportContext:
    """合并上下文：命令行 > 请求文件 > 环境探测"""
    cli_context = ExportContext(
        project_name=args.project
        or FilenameComposer.resolve_token(ExportContext(working_directory=args.cwd or None)),
        working_directory=args.cwd or None,
    )
    return ExportContext.detect().merge_with(extra).merge_with(cli_context)


async def run(args: argparse.Namespace, config: RuntimeConfig) -> Path:
    """执行导出，返回写出的文件路径"""
    sink = FileExportSink(Path(args.out_dir) if args.out_dir else config.export.export_dir)
    coordinator = ExportCoordinator(sink)

    if args.command == ArtifactType.MD.value:
        if args.request:
            request = load_confirm_request(args.request)
            job = await coordinator.export_markdown(
                request.message,
                request.sections,
                resolve_context(args, request.env_context),
            )
        else:
            try:
                text = Path(args.text).read_text(encoding="utf-8")
            except OSError as e:
                raise RequestError(f"读取文件失败: {e}") from e
            job = await coordinator.export_markdown(text, (), resolve_context(args))
        return sink.target_path(job.filename)

    options = RenderOptions(is_dark_theme=args.dark)
    async with BrowserRenderer(config.browser, config.capture.scale) as renderer:
        if args.url:
            page = await renderer.open_url(args.url)
        else:
            page = await renderer.open_file(Path(args.html))
        region = renderer.region(page, args.selector)
        job = await coordinator.export(
            args.command, region=region, options=options, context=resolve_context(args)
        )

    path = sink.target_path(job.filename)
    if job.artifact_type is ArtifactType.PDF:
        logger.info(f"PDF页数: {count_pdf_pages(path)}")
    return path


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = reload_config(args.config) if args.config else get_config()
    configure_logging(config, Path(args.out_dir) if args.out_dir else None)

    try:
        path = asyncio.run(run(args, config))
    except ConfirmExportError as e:
        print(f"导出失败: {e}", file=sys.stderr)
        return 1

    print(path)
    return 0
