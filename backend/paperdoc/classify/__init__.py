"""
行分类 - 文字类别与大纲编号级别

两个分类互相独立，均为作用于同一行的纯函数
"""

from .numbering import (
    DEFAULT_INDENTS,
    NUMBERING_PATTERNS,
    detect_numbering_level,
    get_indent_for_level,
    parse_content_with_numbering,
    parse_line_with_numbering,
    remove_numbering_prefix,
)
from .script import (
    contains_chinese,
    contains_english,
    content_section_for,
    detect_script,
    footnote_section_for,
)

__all__ = [
    "detect_script",
    "contains_chinese",
    "contains_english",
    "content_section_for",
    "footnote_section_for",
    "DEFAULT_INDENTS",
    "NUMBERING_PATTERNS",
    "detect_numbering_level",
    "get_indent_for_level",
    "parse_line_with_numbering",
    "parse_content_with_numbering",
    "remove_numbering_prefix",
]
