"""
格式解析器 - 章节路径 + 格式配置 → 具体样式

职责：
1. 按章节路径定位配置叶子（如 introduction.content）
2. 逐字段回退：配置显式值 → 该路径内置默认值 → 全局默认值
3. 单位换算：中文字号 → 磅/半磅，对齐关键字 → Word对齐，行距倍数 → 原生行距值

依赖：
- python-docx: WD_ALIGN_PARAGRAPH 对齐枚举

测试要点：
- test_resolve_defaults: 无配置时使用内置默认值
- test_resolve_partial_config: 缺失字段逐字段回退
- test_unknown_size_raises: 未知字号抛 FormatError
- test_unknown_alignment_falls_back: 未知对齐回退 left
- test_shape_ignores_fields: 形状外字段不读取
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from docx.enum.text import WD_ALIGN_PARAGRAPH

from ..interfaces import FormatError, IFormatResolver
from ..models import DEFAULT_FORMAT_CONFIG, FormatConfig, StyleFormat

logger = logging.getLogger(__name__)


# 中文字号 → 磅值（半磅 = 磅值 × 2）
FONT_SIZE_POINTS: dict[str, float] = {
    "小五": 9,
    "五号": 10.5,
    "小四": 12,
    "四号": 14,
    "小三": 15,
    "三号": 16,
    "小二": 18,
    "二号": 22,
    "小一": 24,
    "一号": 26,
}

FONT_SIZE_HALF_POINTS: dict[str, int] = {
    name: int(points * 2) for name, points in FONT_SIZE_POINTS.items()
}

ALIGNMENT_MAP: dict[str, WD_ALIGN_PARAGRAPH] = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}

# 1倍行距对应的原生行距值
LINE_SPACING_BASE = 360

GLOBAL_DEFAULT_STYLE = StyleFormat(
    family="宋体",
    size="小四",
    bold=False,
    italic=False,
    alignment="left",
    line_spacing=1.0,
)


class SectionPath(str, Enum):
    """可解析的章节路径"""
    TITLE = "title"
    PERSONAL_INFO = "personalInfo"
    ABSTRACT_TITLE = "abstractTitle"
    ABSTRACT_CONTENT = "abstractContent"
    KEYWORDS = "keywords"
    INTRODUCTION_TITLE = "introduction.title"
    INTRODUCTION_CONTENT = "introduction.content"
    CONCLUSION_TITLE = "conclusion.title"
    CONCLUSION_CONTENT = "conclusion.content"
    REFERENCES_TITLE = "references.title"
    REFERENCES_CONTENT = "references.content"
    CONTENT_CHINESE = "contentChinese"
    CONTENT_ENGLISH = "contentEnglish"
    FOOTNOTE_CHINESE = "footnoteChinese"
    FOOTNOTE_ENGLISH = "footnoteEnglish"


@dataclass(frozen=True)
class SectionShape:
    """章节形状：配置中哪些字段对该章节有效"""
    attrs: tuple[str, ...]
    has_bold: bool = False
    has_line_spacing: bool = False
    has_alignment: bool = True


SECTION_SHAPES: dict[SectionPath, SectionShape] = {
    SectionPath.TITLE: SectionShape(("title",), has_bold=True),
    SectionPath.PERSONAL_INFO: SectionShape(("personal_info",)),
    SectionPath.ABSTRACT_TITLE: SectionShape(("abstract_title",)),
    SectionPath.ABSTRACT_CONTENT: SectionShape(("abstract_content",)),
    SectionPath.KEYWORDS: SectionShape(("keywords",), has_bold=True),
    SectionPath.INTRODUCTION_TITLE: SectionShape(("introduction", "title"), has_bold=True),
    SectionPath.INTRODUCTION_CONTENT: SectionShape(
        ("introduction", "content"), has_line_spacing=True
    ),
    SectionPath.CONCLUSION_TITLE: SectionShape(("conclusion", "title"), has_bold=True),
    SectionPath.CONCLUSION_CONTENT: SectionShape(
        ("conclusion", "content"), has_line_spacing=True
    ),
    SectionPath.REFERENCES_TITLE: SectionShape(("references", "title"), has_bold=True),
    SectionPath.REFERENCES_CONTENT: SectionShape(
        ("references", "content"), has_line_spacing=True
    ),
    SectionPath.CONTENT_CHINESE: SectionShape(("content_chinese",), has_line_spacing=True),
    SectionPath.CONTENT_ENGLISH: SectionShape(("content_english",), has_line_spacing=True),
    SectionPath.FOOTNOTE_CHINESE: SectionShape(("footnote_chinese",), has_alignment=False),
    SectionPath.FOOTNOTE_ENGLISH: SectionShape(("footnote_english",), has_alignment=False),
}


@dataclass(frozen=True)
class ConcreteStyle:
    """具体样式（所有字段均有值）"""
    family: str
    size: str
    points: float
    half_points: int
    bold: bool
    italic: bool
    alignment: str
    line_spacing: float
    line_value: int


def font_size_to_points(size: str) -> float:
    """中文字号 → 磅"""
    try:
        return FONT_SIZE_POINTS[size]
    except KeyError:
        raise FormatError(f"未知字号: {size}") from None


def font_size_to_half_points(size: str) -> int:
    """中文字号 → 半磅"""
    try:
        return FONT_SIZE_HALF_POINTS[size]
    except KeyError:
        raise FormatError(f"未知字号: {size}") from None


def normalize_alignment(alignment: Any) -> str:
    """对齐关键字规范化；无法识别时回退 left（对齐仅影响外观）"""
    if isinstance(alignment, str) and alignment in ALIGNMENT_MAP:
        return alignment
    logger.debug(f"无法识别的对齐方式 {alignment!r}，回退为 left")
    return "left"


def alignment_to_docx(alignment: Any) -> WD_ALIGN_PARAGRAPH:
    return ALIGNMENT_MAP[normalize_alignment(alignment)]


def line_spacing_to_native(multiplier: float | None) -> int:
    """行距倍数 → 原生行距值；缺省为单倍"""
    if not multiplier or multiplier <= 0:
        multiplier = 1.0
    return round(LINE_SPACING_BASE * multiplier)


def _section_path(section_path: SectionPath | str) -> SectionPath:
    try:
        return SectionPath(section_path)
    except ValueError:
        raise FormatError(f"未知的章节路径: {section_path}") from None


def _lookup(config: FormatConfig | None, attrs: tuple[str, ...]) -> StyleFormat | None:
    node: Any = config
    for attr in attrs:
        if node is None:
            return None
        node = getattr(node, attr, None)
    return node


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_positive(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


class FormatResolver(IFormatResolver):
    """格式解析器实现（无状态，可并发使用）"""

    def __init__(self, defaults: FormatConfig | None = None):
        self.defaults = defaults or DEFAULT_FORMAT_CONFIG

    def resolve(
        self,
        section_path: SectionPath | str,
        config: FormatConfig | Mapping[str, Any] | None,
    ) -> ConcreteStyle:
        """解析章节的具体样式"""
        path = _section_path(section_path)
        shape = SECTION_SHAPES[path]

        if isinstance(config, Mapping):
            config = FormatConfig.model_validate(config)

        explicit = _lookup(config, shape.attrs)
        builtin = _lookup(self.defaults, shape.attrs)

        def pick(name: str, accept: Callable[[Any], bool], read_explicit: bool = True) -> Any:
            layers = (explicit, builtin, GLOBAL_DEFAULT_STYLE) if read_explicit else (
                builtin, GLOBAL_DEFAULT_STYLE
            )
            for layer in layers:
                if layer is None:
                    continue
                value = getattr(layer, name)
                if accept(value):
                    return value
            return getattr(GLOBAL_DEFAULT_STYLE, name)

        size = pick("size", _is_text)
        line_spacing = (
            pick("line_spacing", _is_positive)
            if shape.has_line_spacing
            else GLOBAL_DEFAULT_STYLE.line_spacing
        )
        alignment = (
            normalize_alignment(pick("alignment", _is_text))
            if shape.has_alignment
            else GLOBAL_DEFAULT_STYLE.alignment
        )

        return ConcreteStyle(
            family=pick("family", _is_text),
            size=size,
            points=font_size_to_points(size),
            half_points=font_size_to_half_points(size),
            bold=pick("bold", _is_bool, read_explicit=shape.has_bold),
            italic=pick("italic", _is_bool),
            alignment=alignment,
            line_spacing=float(line_spacing),
            line_value=line_spacing_to_native(line_spacing),
        )


_default_resolver = FormatResolver()


def resolve_format(
    section_path: SectionPath | str,
    config: FormatConfig | Mapping[str, Any] | None = None,
) -> ConcreteStyle:
    """使用内置默认值解析章节样式"""
    return _default_resolver.resolve(section_path, config)
