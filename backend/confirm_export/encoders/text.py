"""
Markdown编码器 - 文本 + 段落选择摘要

输出结构：
    {原文}

    ---

    ## Sections

    ### ☑ {已选段落标题}

    {内容}

    ### ☐ {未选段落标题}

    {内容}

没有段落时只输出原文。不涉及截图与分页。
"""

from __future__ import annotations

from collections.abc import Sequence

from ..config import get_config
from ..interfaces import ITextEncoder
from ..models import ArtifactType, ExportArtifact, ExportContext, Section
from ..naming import FilenameComposer

SELECTED_MARK = "☑"
UNSELECTED_MARK = "☐"
SEPARATOR = "\n\n---\n\n"
SUMMARY_HEADING = "## Sections"


class MarkdownEncoder(ITextEncoder):
    """Markdown编码器实现"""

    def __init__(self, composer: FilenameComposer | None = None):
        self.composer = composer or FilenameComposer.from_config(get_config())

    def encode(
        self,
        text: str,
        sections: Sequence[Section] = (),
        context: ExportContext | None = None,
    ) -> ExportArtifact:
        return ExportArtifact(
            filename=self.composer.compose(ArtifactType.MD.extension, context),
            type=ArtifactType.MD,
            payload=self.render(text, sections).encode("utf-8"),
        )

    def render(self, text: str, sections: Sequence[Section] = ()) -> str:
        """拼接原文与段落摘要"""
        if not sections:
            return text

        blocks = []
        for section in sections:
            mark = SELECTED_MARK if section.selected else UNSELECTED_MARK
            block = f"### {mark} {section.title}"
            if section.content:
                block += f"\n\n{section.content.rstrip()}"
            blocks.append(block)

        summary = SUMMARY_HEADING + "\n\n" + "\n\n".join(blocks)
        return text.rstrip("\n") + SEPARATOR + summary + "\n"
