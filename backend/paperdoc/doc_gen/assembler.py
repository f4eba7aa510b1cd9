"""
文档装配器 - 论文内容 + 格式配置 → 有序段落序列

职责：
1. 按固定章节顺序输出段落：
   题目 → 个人信息 → 摘要 → 关键词 → 引言 → 分隔线+正文 → 分隔线+结论 → 分隔线+参考文献
2. 正文逐行：识别文字类别选择中/英文格式，识别编号级别确定首行缩进，拆分脚注锚点
3. 收集被引用的脚注定义（按脚注内容的文字类别选择脚注格式）

所有字体与字号均经格式解析器得到，装配器不硬编码任何字体。
空章节直接跳过；调用方负责清洗与校验（装配器信任输入）。

测试要点：
- test_section_order: 章节顺序
- test_skip_empty_sections: 空章节跳过
- test_blank_line_keeps_paragraph: 空行保留为空段落
- test_body_script_styles: 正文中英文格式选择
- test_body_numbering_indent: 编号级别缩进
- test_body_footnote_runs: 脚注锚点拆分
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from ..classify import (
    content_section_for,
    detect_script,
    footnote_section_for,
    get_indent_for_level,
    parse_line_with_numbering,
)
from ..interfaces import IDocumentAssembler, IFormatResolver
from ..models import FormatConfig, NumberingLevel, PaperContent, Segment
from ..validation import sanitize_file_name
from .footnotes import splice_footnotes
from .resolver import LINE_SPACING_BASE, ConcreteStyle, FormatResolver, SectionPath

logger = logging.getLogger(__name__)

DOCX_EXTENSION = ".docx"

ABSTRACT_HEADING = "摘  要"
KEYWORDS_LABEL = "关键词："
INTRODUCTION_HEADING = "引言"
CONCLUSION_HEADING = "结论"
REFERENCES_HEADING = "参考文献"

# 段前/段后间距（mm）
SPACING_MM: dict[str, tuple[float, float]] = {
    "title": (10, 10),
    "personalInfo": (5, 15),
    "heading": (10, 5),
    "abstract": (5, 15),
    "keywords": (5, 15),
    "line": (5, 5),
    "divider": (5, 5),
}


class ParagraphKind(str, Enum):
    """段落类型"""
    TEXT = "text"
    BLANK = "blank"
    DIVIDER = "divider"


@dataclass(frozen=True)
class RunSpec:
    """文本片段（脚注锚点时 text 为源标记，渲染时不输出文字）"""
    text: str
    style: ConcreteStyle
    bold: bool = False
    footnote_id: int | None = None

    @property
    def is_anchor(self) -> bool:
        return self.footnote_id is not None


@dataclass(frozen=True)
class ParagraphSpec:
    """段落"""
    section: str
    kind: ParagraphKind = ParagraphKind.TEXT
    runs: tuple[RunSpec, ...] = ()
    alignment: str = "left"
    line_value: int = LINE_SPACING_BASE
    first_line_indent: float = 0.0  # pt
    space_before: float = 0.0       # mm
    space_after: float = 0.0        # mm

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class FootnoteSpec:
    """脚注定义"""
    id: int
    text: str
    style: ConcreteStyle


@dataclass
class AssembledDocument:
    """装配结果"""
    title: str
    paragraphs: list[ParagraphSpec] = field(default_factory=list)
    footnotes: list[FootnoteSpec] = field(default_factory=list)

    def section_paragraphs(self, section: str) -> list[ParagraphSpec]:
        return [p for p in self.paragraphs if p.section == section]

    @property
    def file_name(self) -> str:
        return build_file_name(self.title)


def build_file_name(title: str, extension: str = DOCX_EXTENSION) -> str:
    """清洗后的题目 + 扩展名"""
    return f"{sanitize_file_name(title)}{extension}"


class _AssemblyState:
    """单次装配的上下文（不跨调用共享）"""

    def __init__(self, content: PaperContent, config: FormatConfig | None):
        self.content = content
        self.config = config
        self.footnote_table = content.footnote_table()
        self.anchored_ids: list[int] = []
        self.indent_overrides = config.numbering_indents if config else None

    def note_anchor(self, footnote_id: int) -> None:
        if footnote_id not in self.anchored_ids:
            self.anchored_ids.append(footnote_id)


class DocumentAssembler(IDocumentAssembler):
    """文档装配器实现（无状态，可并发装配不同文档）"""

    def __init__(self, resolver: IFormatResolver | None = None):
        self.resolver = resolver or FormatResolver()

    def assemble(self, content: PaperContent, config: FormatConfig | None = None) -> AssembledDocument:
        """按固定章节顺序装配段落"""
        state = _AssemblyState(content, config)
        document = AssembledDocument(title=content.title)
        out = document.paragraphs

        out.append(self._single_line("title", content.title, SectionPath.TITLE, state))
        out.append(
            self._single_line(
                "personalInfo", content.personal_info_line(), SectionPath.PERSONAL_INFO, state
            )
        )

        if content.abstract.strip():
            out.append(self._heading("abstractTitle", ABSTRACT_HEADING, SectionPath.ABSTRACT_TITLE, state))
            out.extend(
                self._section_lines(
                    "abstract", content.abstract, SectionPath.ABSTRACT_CONTENT, state,
                    spacing="abstract",
                )
            )

        if content.keywords.strip():
            out.append(self._keywords(content.keywords, state))

        if content.introduction.strip():
            out.append(
                self._heading(
                    "introductionTitle", INTRODUCTION_HEADING, SectionPath.INTRODUCTION_TITLE, state
                )
            )
            out.extend(
                self._section_lines(
                    "introduction", content.introduction, SectionPath.INTRODUCTION_CONTENT, state,
                    with_footnotes=True,
                )
            )

        if content.body.strip():
            out.append(self._divider())
            out.extend(self._body_lines(content.body, state))

        if content.conclusion.strip():
            out.append(self._divider())
            out.append(
                self._heading("conclusionTitle", CONCLUSION_HEADING, SectionPath.CONCLUSION_TITLE, state)
            )
            out.extend(
                self._section_lines(
                    "conclusion", content.conclusion, SectionPath.CONCLUSION_CONTENT, state,
                    with_footnotes=True,
                )
            )

        if content.references.strip():
            out.append(self._divider())
            out.append(
                self._heading("referencesTitle", REFERENCES_HEADING, SectionPath.REFERENCES_TITLE, state)
            )
            out.extend(
                self._section_lines(
                    "references", content.references, SectionPath.REFERENCES_CONTENT, state,
                    indent=False,
                )
            )

        document.footnotes = self._footnotes(state)
        logger.debug(
            f"装配完成: {len(document.paragraphs)} 个段落, {len(document.footnotes)} 条脚注"
        )
        return document

    # === 段落构造 ===

    def _style(self, path: SectionPath | str, state: _AssemblyState) -> ConcreteStyle:
        return self.resolver.resolve(path, state.config)

    def _paragraph(
        self,
        section: str,
        runs: list[RunSpec],
        style: ConcreteStyle,
        spacing: str,
        first_line_indent: float = 0.0,
    ) -> ParagraphSpec:
        before, after = SPACING_MM[spacing]
        return ParagraphSpec(
            section=section,
            runs=tuple(runs),
            alignment=style.alignment,
            line_value=style.line_value,
            first_line_indent=first_line_indent,
            space_before=before,
            space_after=after,
        )

    def _single_line(
        self, section: str, text: str, path: SectionPath, state: _AssemblyState
    ) -> ParagraphSpec:
        style = self._style(path, state)
        runs = [RunSpec(text, style, bold=style.bold)] if text else []
        return self._paragraph(section, runs, style, spacing=section)

    def _heading(
        self, section: str, text: str, path: SectionPath, state: _AssemblyState
    ) -> ParagraphSpec:
        style = self._style(path, state)
        return self._paragraph(section, [RunSpec(text, style, bold=style.bold)], style, "heading")

    def _keywords(self, keywords: str, state: _AssemblyState) -> ParagraphSpec:
        style = self._style(SectionPath.KEYWORDS, state)
        runs = [
            RunSpec(KEYWORDS_LABEL, style, bold=True),
            RunSpec(keywords, style, bold=style.bold),
        ]
        return self._paragraph("keywords", runs, style, "keywords")

    def _divider(self) -> ParagraphSpec:
        before, after = SPACING_MM["divider"]
        return ParagraphSpec(
            section="divider",
            kind=ParagraphKind.DIVIDER,
            space_before=before,
            space_after=after,
        )

    def _blank(self, section: str) -> ParagraphSpec:
        return ParagraphSpec(section=section, kind=ParagraphKind.BLANK)

    def _runs(
        self,
        line: str,
        style: ConcreteStyle,
        state: _AssemblyState,
        with_footnotes: bool,
    ) -> list[RunSpec]:
        if not with_footnotes:
            return [RunSpec(line, style, bold=style.bold)]

        runs = []
        for segment in splice_footnotes(line, state.footnote_table):
            runs.append(self._segment_run(segment, style, state))
        return runs

    def _segment_run(self, segment: Segment, style: ConcreteStyle, state: _AssemblyState) -> RunSpec:
        if segment.is_anchor:
            state.note_anchor(segment.footnote_id)
            return RunSpec(segment.text, style, footnote_id=segment.footnote_id)
        return RunSpec(segment.text, style, bold=style.bold)

    def _section_lines(
        self,
        section: str,
        text: str,
        path: SectionPath,
        state: _AssemblyState,
        spacing: str = "line",
        indent: bool = True,
        with_footnotes: bool = False,
    ) -> list[ParagraphSpec]:
        """普通章节：按行拆分，空行保留，非空行首行缩进（参考文献除外）"""
        style = self._style(path, state)
        first_line = get_indent_for_level(NumberingLevel.NONE) * style.points if indent else 0.0

        paragraphs = []
        for line in text.split("\n"):
            if not line.strip():
                paragraphs.append(self._blank(section))
                continue
            runs = self._runs(line, style, state, with_footnotes)
            paragraphs.append(self._paragraph(section, runs, style, spacing, first_line))
        return paragraphs

    def _body_lines(self, body: str, state: _AssemblyState) -> list[ParagraphSpec]:
        """正文：逐行选择中/英文格式、按编号级别缩进、拆分脚注"""
        paragraphs = []
        for line in body.split("\n"):
            if not line.strip():
                paragraphs.append(self._blank("body"))
                continue

            style = self._style(content_section_for(detect_script(line)), state)
            pattern = parse_line_with_numbering(line, state.indent_overrides)
            runs = self._runs(line, style, state, with_footnotes=True)
            paragraphs.append(
                self._paragraph("body", runs, style, "line", pattern.indent * style.points)
            )
        return paragraphs

    def _footnotes(self, state: _AssemblyState) -> list[FootnoteSpec]:
        specs = []
        for footnote_id in state.anchored_ids:
            text = state.footnote_table[footnote_id].strip()
            style = self._style(footnote_section_for(detect_script(text)), state)
            specs.append(FootnoteSpec(id=footnote_id, text=text, style=style))
        return specs
