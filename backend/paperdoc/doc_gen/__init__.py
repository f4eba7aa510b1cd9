"""
文档生成模块 - 格式解析/脚注拆分/文档装配/docx渲染

子模块：
- resolver: 章节格式解析与单位换算
- footnotes: 行内脚注标记拆分
- assembler: 按章节顺序装配段落序列
- footnote_part: docx 脚注部件
- renderer: 段落序列 → docx字节
"""

from .assembler import (
    AssembledDocument,
    DocumentAssembler,
    FootnoteSpec,
    ParagraphKind,
    ParagraphSpec,
    RunSpec,
    build_file_name,
)
from .footnotes import FootnoteReference, extract_footnote_references, splice_footnotes
from .renderer import DocxRenderer
from .resolver import (
    ConcreteStyle,
    FormatResolver,
    SectionPath,
    font_size_to_half_points,
    font_size_to_points,
    line_spacing_to_native,
    resolve_format,
)

__all__ = [
    "FormatResolver",
    "ConcreteStyle",
    "SectionPath",
    "resolve_format",
    "font_size_to_points",
    "font_size_to_half_points",
    "line_spacing_to_native",
    "FootnoteReference",
    "extract_footnote_references",
    "splice_footnotes",
    "DocumentAssembler",
    "AssembledDocument",
    "ParagraphSpec",
    "ParagraphKind",
    "RunSpec",
    "FootnoteSpec",
    "build_file_name",
    "DocxRenderer",
]
