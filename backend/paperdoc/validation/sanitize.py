"""
输入清洗 - 保护装配流水线免受超长文本与控制字符影响

职责：
1. 去除 ASCII 控制字符（0x00-0x1F, 0x7F）与 U+FFFE/U+FFFF
2. 首尾去空白后按字符数截断
3. 输出文件名清洗

所有函数为纯函数且不会失败：非文本输入返回空串。

测试要点：
- test_sanitize_removes_control_chars: 去除控制字符
- test_sanitize_limits_length: 截断长度
- test_multiline_keeps_line_breaks: 多行章节保留换行
- test_file_name_invalid_chars: 文件名非法字符替换
"""

from __future__ import annotations

import re
from typing import Any

from ..models import Footnote, PaperContent, PersonalInfoItem
from .limits import LIMITS, LimitsConfig

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1F\x7F\uFFFE\uFFFF]")
_UNSAFE_FILE_CHARS_RE = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text(text: Any, max_length: int) -> str:
    """清洗单行文本"""
    if not isinstance(text, str):
        return ""

    sanitized = _CONTROL_CHARS_RE.sub("", text).strip()
    return sanitized[:max(max_length, 0)]


def sanitize_multiline(text: Any, max_length: int) -> str:
    """清洗多行文本（保留换行，每行内去除控制字符）"""
    if not isinstance(text, str):
        return ""

    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    sanitized = "\n".join(_CONTROL_CHARS_RE.sub("", line) for line in lines).strip()
    return sanitized[:max(max_length, 0)]


def sanitize_file_name(name: Any, max_length: int = LIMITS.file_name_max_length) -> str:
    """替换文件系统非法字符与空白为下划线，并限制长度"""
    if not isinstance(name, str):
        return ""

    safe = _UNSAFE_FILE_CHARS_RE.sub("_", name)
    safe = _WHITESPACE_RE.sub("_", safe)
    return safe[:max_length]


def sanitize_paper_content(
    content: PaperContent,
    limits: LimitsConfig | None = None,
) -> PaperContent:
    """按各字段上限清洗整份论文内容（返回新对象）"""
    limits = limits or LIMITS
    section_max = limits.content_max_length

    return PaperContent(
        title=sanitize_text(content.title, limits.title_max_length),
        personal_info=[
            PersonalInfoItem(
                id=item.id,
                label=sanitize_text(item.label, limits.personal_info_label_max_length),
                value=sanitize_text(item.value, limits.personal_info_value_max_length),
            )
            for item in content.personal_info
        ],
        abstract=sanitize_multiline(content.abstract, limits.abstract_max_length),
        keywords=sanitize_text(content.keywords, limits.keywords_max_length),
        introduction=sanitize_multiline(content.introduction, section_max),
        body=sanitize_multiline(content.body, section_max),
        conclusion=sanitize_multiline(content.conclusion, section_max),
        references=sanitize_multiline(content.references, section_max),
        footnotes=[
            Footnote(id=f.id, content=sanitize_text(f.content, limits.footnote_max_length))
            for f in content.footnotes
        ],
    )
