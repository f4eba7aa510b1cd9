"""
docx渲染器 - 段落序列 → Word文档字节

职责：
1. 单节、四边 25.4mm 页边距
2. 按段落规格设置对齐/行距/段前段后/首行缩进，按片段规格设置字体
3. 正文脚注锚点写为 footnoteReference，脚注定义写入 footnotes.xml
4. 分隔线段落使用下边框

依赖：
- python-docx: Word操作

测试要点：
- test_render_produces_docx: 输出可被 python-docx 重新打开
- test_render_footnote_part: 脚注部件与引用
- test_render_async: 异步渲染
"""

from __future__ import annotations

import asyncio
import io
import logging

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Mm, Pt
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from ..interfaces import IDocumentRenderer, PaperDocError, SerializationError
from .assembler import AssembledDocument, ParagraphKind, ParagraphSpec
from .footnote_part import add_footnotes_part, add_reference_mark
from .resolver import ConcreteStyle, alignment_to_docx

logger = logging.getLogger(__name__)

PAGE_MARGIN_MM = 25.4

# Word 原生行距单位：240 = 单倍
_WORD_LINE_UNIT = 240


def apply_font(run: Run, style: ConcreteStyle, bold: bool) -> None:
    """设置 run 字体（西文与东亚字体同时设置）"""
    font = run.font
    font.name = style.family
    font.size = Pt(style.points)
    if bold:
        font.bold = True
    if style.italic:
        font.italic = True
    run._element.rPr.rFonts.set(qn("w:eastAsia"), style.family)


def add_bottom_border(paragraph: Paragraph) -> None:
    """段落下边框（分隔线）"""
    p_pr = paragraph._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "6")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), "auto")
    p_bdr.append(bottom)
    p_pr.append(p_bdr)


class DocxRenderer(IDocumentRenderer):
    """docx渲染器实现"""

    def __init__(self, margin_mm: float = PAGE_MARGIN_MM):
        self.margin_mm = margin_mm

    def render(self, document: AssembledDocument) -> bytes:
        """渲染为docx字节（失败时不返回部分输出）"""
        try:
            doc = Document()
            self._apply_page_layout(doc)

            for spec in document.paragraphs:
                self._add_paragraph(doc, spec)

            if document.footnotes:
                add_footnotes_part(doc, document.footnotes, apply_font)

            buffer = io.BytesIO()
            doc.save(buffer)
        except PaperDocError:
            raise
        except Exception as e:
            logger.exception("docx序列化失败")
            raise SerializationError(f"文档序列化失败: {e}") from e

        data = buffer.getvalue()
        logger.info(f"docx渲染完成: {document.file_name} ({len(data)} 字节)")
        return data

    async def render_async(self, document: AssembledDocument) -> bytes:
        """在工作线程中渲染，避免阻塞事件循环"""
        return await asyncio.to_thread(self.render, document)

    def _apply_page_layout(self, doc) -> None:
        section = doc.sections[0]
        margin = Mm(self.margin_mm)
        section.top_margin = margin
        section.right_margin = margin
        section.bottom_margin = margin
        section.left_margin = margin

    def _add_paragraph(self, doc, spec: ParagraphSpec) -> Paragraph:
        paragraph = doc.add_paragraph()

        if spec.kind is ParagraphKind.BLANK:
            return paragraph

        if spec.kind is ParagraphKind.DIVIDER:
            add_bottom_border(paragraph)
            paragraph.paragraph_format.space_before = Mm(spec.space_before)
            paragraph.paragraph_format.space_after = Mm(spec.space_after)
            return paragraph

        fmt = paragraph.paragraph_format
        fmt.alignment = alignment_to_docx(spec.alignment)
        fmt.line_spacing = spec.line_value / _WORD_LINE_UNIT
        fmt.space_before = Mm(spec.space_before)
        fmt.space_after = Mm(spec.space_after)
        if spec.first_line_indent:
            fmt.first_line_indent = Pt(spec.first_line_indent)

        for run_spec in spec.runs:
            if run_spec.is_anchor:
                run = paragraph.add_run()
                apply_font(run, run_spec.style, False)
                add_reference_mark(run, "w:footnoteReference", run_spec.footnote_id)
            else:
                run = paragraph.add_run(run_spec.text)
                apply_font(run, run_spec.style, run_spec.bold)

        return paragraph
