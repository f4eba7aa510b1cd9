"""
文字类别识别 - 按行判断中文/英文/混排，用于选择字体

混排行按约定使用中文格式；不含中英文字符的行（数字/标点）默认中文，
使其沿用正文基础字体。
"""

from __future__ import annotations

import re

from ..models import ScriptKind

_CJK_RE = re.compile(r"[\u4e00-\u9fff]")
_LATIN_RE = re.compile(r"[A-Za-z]")


def contains_chinese(text: str) -> bool:
    return bool(_CJK_RE.search(text))


def contains_english(text: str) -> bool:
    return bool(_LATIN_RE.search(text))


def detect_script(line: str) -> ScriptKind:
    """判断一行文本的文字类别"""
    has_chinese = contains_chinese(line)
    has_english = contains_english(line)

    if has_chinese and has_english:
        return ScriptKind.MIXED
    if has_english:
        return ScriptKind.ENGLISH
    return ScriptKind.CHINESE


def content_section_for(script: ScriptKind) -> str:
    """正文格式节：仅纯英文行使用英文格式"""
    return "contentEnglish" if script is ScriptKind.ENGLISH else "contentChinese"


def footnote_section_for(script: ScriptKind) -> str:
    """脚注格式节"""
    return "footnoteEnglish" if script is ScriptKind.ENGLISH else "footnoteChinese"
